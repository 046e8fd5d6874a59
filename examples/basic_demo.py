#!/usr/bin/env python3
"""
Basic example demonstrating cipherbridge.

This example shows:
1. Password-based key derivation
2. Encryption with different content encodings
3. Decryption back to text and bytes
4. Content fingerprints
5. Error handling with settle()
"""

import asyncio
import os
import sys

# Add the cipherbridge package to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cipherbridge import CipherBridgeConfig, create_cipher_bridge, settle


async def main():
    print("cipherbridge demo")
    print("=" * 60)

    bridge = create_cipher_bridge(CipherBridgeConfig.from_env())

    # 1. Derive a key
    print("\n1. Deriving key from password...")
    salt = os.urandom(16).hex()
    key = await bridge.derive_key("correct horse battery staple", salt, 100_000)
    print(f"   Salt: {salt}")
    print(f"   Key:  {key[:8]}... ({len(key)} chars)")

    # 2. Encrypt in each content encoding
    print("\n2. Encrypting...")
    message = "Hello from cipherbridge!"
    sealed = {}
    for encoding in (None, "base64", "hex", "utf8"):
        sealed[encoding] = await bridge.encrypt(key, message, output_encoding=encoding)
        content = sealed[encoding].content
        print(f"   {str(encoding):>6}: {content[:24]!r}")
    print(f"   iv={sealed[None].iv} tag={sealed[None].tag}")

    # 3. Decrypt
    print("\n3. Decrypting...")
    for encoding, data in sealed.items():
        plain = await bridge.decrypt(key, data, output_encoding="utf8", input_encoding=encoding)
        assert plain == message, f"Round trip failed for {encoding}"
        print(f"   {str(encoding):>6}: {plain}")

    raw = await bridge.decrypt(key, sealed[None], output_encoding="binary")
    print(f"   binary: {raw!r}")

    # 4. Fingerprints
    print("\n4. Fingerprinting...")
    print(f"   md5 hex:    {await bridge.calc_md5_hash(message.encode(), 'hex')}")
    print(f"   md5 base64: {await bridge.calc_md5_hash(message.encode(), 'base64')}")

    # 5. Errors
    print("\n5. Error handling...")
    result = await settle(bridge.decrypt(key, "not-an-object"))
    print(f"   {result.error.kind.value}: {result.error}")

    print("\nDone.")


if __name__ == "__main__":
    asyncio.run(main())
