"""Infrastructure layer — resource inventory client and the ancestry cache file.

This layer depends on stdlib and third-party libs (googleapiclient, google-auth).
It may import from domain but never from services, commands, or output.
"""
