"""A sector-based file system on a simulated in-memory disk, with its supporting data structures."""

__version__ = "0.1.0"
__all__ = [
    "bitmap",
    "debug",
    "lists",
    "hashtable",
    "selftest",
    "synchdisk",
    "pbitmap",
    "filehdr",
    "openfile",
    "directory",
    "filesys",
]