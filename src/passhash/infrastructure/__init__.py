"""Infrastructure layer - implementations backed by argon2-cffi.

The domain layer defines parameters and salt generation; this layer
adds the derivation primitive, the encoded hash codec and the hashers.
"""
