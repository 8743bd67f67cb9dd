from dupfinder.core.models import HashAlgorithmName

ALGORITHM_ALIASES = {
    "xxhash": HashAlgorithmName.XXHASH,
    "xxh": HashAlgorithmName.XXHASH,
    "md5": HashAlgorithmName.MD5,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Content digest used to compare files of the same size:\n"
    "  xxhash : xxHash 128-bit, fast (default)\n"
    "  md5    : MD5, same digests as md5sum\n"
)

EPILOG_TEXT = """
Examples:
  Find duplicates under the current directory
  %(prog)s

  Find duplicates across several trees, following symbolic links
  %(prog)s -s ~/Pictures /mnt/backup/Pictures

  Hash with 4 threads and save the report (for scripts)
  %(prog)s -j 4 ~/Downloads > ~/duplicates.txt

  Show statistics and dump the internal indexes after the report
  %(prog)s -v -d ~/Downloads
"""
