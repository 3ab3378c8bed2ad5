from coll.core.models import HashAlgorithmName

ALGORITHM_ALIASES = {
    "sha256": HashAlgorithmName.SHA256,
    "sha1": HashAlgorithmName.SHA1,
    "md5": HashAlgorithmName.MD5,
    "blake2b": HashAlgorithmName.BLAKE2B,
    "xxh64": HashAlgorithmName.XXH64,
    "xxh3": HashAlgorithmName.XXH3_128,
    "xxh3_128": HashAlgorithmName.XXH3_128,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Hash function used to compare file contents:\n"
    "  sha256     : Cryptographic, 256-bit (default)\n"
    "  sha1       : Cryptographic, 160-bit (legacy)\n"
    "  md5        : 128-bit (legacy, fast)\n"
    "  blake2b    : Cryptographic, 512-bit, fast on 64-bit CPUs\n"
    "  xxh64      : Non-cryptographic, 64-bit (fastest)\n"
    "  xxh3       : Non-cryptographic, 128-bit\n"
    "Example    : %(prog)s -i ~/Downloads --algorithm blake2b\n"
)

EPILOG_TEXT = """
Examples:
  Basic usage - find duplicates in Downloads folder
  %(prog)s -i ~/Downloads

  Several roots at once, one subdirectory left out
  %(prog)s -i ~/Downloads ~/Pictures -e ~/Pictures/raw

  No progress line, report only (for scripts)
  %(prog)s -q -i ~/Downloads > ~/Downloads/report.txt

  Follow symbolic links to directories, 8 hashing threads
  %(prog)s -i /srv/data --follow-symlinks -j 8
"""
