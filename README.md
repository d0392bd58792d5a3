# sectorfs

A small, flat file system on a simulated disk made of fixed-size
sectors. It is meant for learning how a file system fits together. It
has a bitmap of free sectors, one-sector file headers (i-nodes) with
direct block pointers only, a fixed-size root directory, and open files
that read and write across sector boundaries.

The package also contains the data structures the file system is built
from, plus a few general-purpose containers: a bitmap, a singly linked
list and a sorted list, and a chained hash table that grows as it fills.

It has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Using the file system

```python
from sectorfs.synchdisk import SynchDisk
from sectorfs.filesys import FileSystem

disk = SynchDisk(num_sectors=1024, sector_size=128)
fs = FileSystem(disk, format=True)       # lay down an empty directory and free map

fs.create("notes", 300)                  # files have a fixed size, set at creation
f = fs.open("notes")
f.write(b"hello, sectors")               # returns 14, the number of bytes written
f.seek(0)
print(f.read(5))                         # b'hello'
print(len(f))                            # 300

print(fs.list())                         # ['notes']
fs.remove("notes")
```

A `FileSystem` built with `format=False` (the default) opens the free
map and the directory that an earlier format left on the same
`SynchDisk` object.

`fs.dump()` returns a text description of the free map's and the
directory's headers, the set bits of the free map, and every file's
header and contents.

### Errors

- `create` raises `FileExistsError` if the name is already taken, and
  `sectorfs.filehdr.NoSpaceError` if there is no free sector for the
  header, no free directory entry, or not enough free sectors for the
  data. A failed `create` leaves the disk unchanged.
- `open` and `remove` raise `FileNotFoundError` for an unknown name.

### Limits

- File names are at most 9 bytes. Longer names are cut to 9.
- The root directory has 10 entries. There are no subdirectories.
- A file's size is fixed when it is created. It cannot be larger than
  the number of direct pointers in a header times the sector size
  (with 128-byte sectors: 30 pointers, 3840 bytes).
- A write that runs past the end of a file is cut short, and the number
  of bytes actually written is returned. A read past the end returns
  fewer bytes.

## Building blocks

- `sectorfs.synchdisk.SynchDisk`: an in-memory disk; `read_sector` and
  `write_sector` move one whole sector at a time under a lock.
- `sectorfs.bitmap.Bitmap`: set, clear and test bits, find and claim
  the first free bit (`find_and_set`, which returns `None` when full),
  and convert to and from raw bytes.
- `sectorfs.pbitmap.PersistentBitmap`: a bitmap that can be stored at
  the start of an open file and loaded from it.
- `sectorfs.filehdr.FileHeader`: allocates a file's data sectors from a
  free map and maps byte offsets in the file to disk sectors.
- `sectorfs.openfile.OpenFile`: `seek`, `read`, `write`, `read_at` and
  `write_at` within a file.
- `sectorfs.directory.Directory`: a table of names and header sectors.
- `sectorfs.lists.LinkedList` and `sectorfs.lists.SortedList`: each
  item may appear at most once; a sorted list orders items with a
  three-way compare function.
- `sectorfs.hashtable.HashTable`: a chained hash table built from a
  key function and a hash function; it grows fourfold once it holds
  three items per bucket on average.
- `sectorfs.debug.Debug`: writes messages to standard error only for
  the flags that are turned on (`"+"` turns on all of them).

`sectorfs.selftest.lib_self_test()` runs the built-in checks on the
bitmap, list, sorted list and hash table, raising `AssertionError` on a
failure and returning the names of what it tested.

## What it does not do

- The disk lives only in memory. Nothing is saved to a file on the host,
  so a file system lasts only as long as its `SynchDisk` object.
- There is no command-line program; the package is used from Python.
- Files cannot grow, and there is no locking around file system
  operations beyond the disk's one-request-at-a-time lock.