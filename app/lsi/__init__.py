"""lsi - analyze file paths one element at a time.

Walks each component of a pathname, resolving type, permissions,
ownership, device and inode, and follows symbolic links to their
targets with indentation showing each level of indirection.
"""

__version__ = "0.1.0"
