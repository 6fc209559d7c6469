"""
Version information for Video-Poker-over-SSH
This file is automatically updated on releases.
"""

VERSION = "1.0.0"
BUILD_DATE = "dev"
COMMIT_HASH = "unknown"


def get_version_info():
    """Get formatted version information"""
    return {
        'version': VERSION,
        'build_date': BUILD_DATE,
        'commit_hash': COMMIT_HASH
    }
