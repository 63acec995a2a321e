"""
Thin wrappers around boto3 S3 calls.

Contains key normalization, object read/write/delete functions and the
directory emulation used by the providers.
"""
