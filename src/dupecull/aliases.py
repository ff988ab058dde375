from dupecull.core.models import TraversalOrder, HashAlgorithmName

ORDER_ALIASES = {
    "identity": TraversalOrder.IDENTITY,
    "inode": TraversalOrder.IDENTITY,
    "name": TraversalOrder.NAME,
    "depth": TraversalOrder.DEPTH,
}

ORDER_CHOICES = list(ORDER_ALIASES.keys())

ORDER_HELP_TEXT = (
    "Traversal order; the first file met in each duplicate group is kept:\n"
    "  identity, inode : Entries of each directory sorted by inode number (default)\n"
    "  name            : Entries of each directory sorted by name\n"
    "  depth           : Shallower files before deeper ones\n"
)

HASH_ALIASES = {
    "sha512": HashAlgorithmName.SHA512,
    "xxhash": HashAlgorithmName.XXHASH,
}

HASH_CHOICES = list(HASH_ALIASES.keys())

HASH_HELP_TEXT = (
    "Content digest:\n"
    "  sha512 : SHA-512 (default)\n"
    "  xxhash : xxHash64, faster, not cryptographic\n"
)

EPILOG_TEXT = """
Examples:
  Dry run - list duplicates in Downloads, nothing is deleted
  %(prog)s ~/Downloads

  Only files between 500KB and 10MB, in two directories
  %(prog)s ~/Downloads ~/Pictures -m 500K -M 10M

  Report groups of 3 or more identical files only
  %(prog)s ~/Downloads -c 3

  Actually delete duplicates, keeping the shallowest copy
  %(prog)s ~/Downloads --order depth --delete-files

  Move duplicates to the system trash instead of deleting them
  %(prog)s ~/Downloads --delete-files --trash
"""
