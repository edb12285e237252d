# c4

Content identifiers built on SHA-512, and the tools around them. The package
is a library with no dependencies beyond the standard library.

- `c4.id`: `ID`, `identify(data)` and `parse(text)` for 90-character C4 IDs.
  `ID` is a frozen, ordered dataclass holding a 64-byte digest. Its members
  are `is_nil()`, `compare(other)` and `sum(other)`. `sum` hashes the two
  digests together in sorted order.
- `c4.tree`: `Tree`, the sorted Merkle tree that gives one ID to a set of
  IDs, and `read_tree(stream)`, which loads a tree from its binary form.
  `read_tree` raises `InvalidTreeError` on bad data.
- `c4.charset`: conversion between the pre-2016 character set and the current
  one. It offers `old_charset_id_to_new`, `new_charset_id_to_old` and
  `check_character_set`.
- `c4.naturalsort`: `natural_less(left, right)` and `natural_sorted(items)`.
  Runs of digits compare as numbers.
- `c4.filemode`: `FileMode` flags, `parse_file_mode`, `format_file_mode` and
  `is_dir`. They handle `ls`-style mode strings such as `drwxr-xr-x`.
- `c4.nillist`: `NilList`, a sorted list of paths with `/` replaced by a zero
  byte. It offers `find`, `end`, `sublist` and `children`. The module also has
  `from_slash`, `to_slash` and `diff`.
- `c4.manifest`: `Manifest` and `FileInfo`, with `parse_file_info`,
  `make_file_info`, `new_file_info` and `file_info_from_path`.
- `c4.store`: stores that hold data by ID.
  - `base.Store` is the abstract interface, with `open`, `create` and `remove`.
  - `folder.Folder`, `ram.RAM` and `mapstore.MapStore` implement it.
  - `validating.Validating` and `logger.Logger` wrap another store.

## Install

    pip install .

## Identify data

    from c4.id import identify, parse

    ident = identify(b"alfa")          # bytes-like data or a binary stream
    text = str(ident)                  # "c4..." (90 characters)
    assert parse(text) == ident

`parse` raises `ValueError` for a string that is not a valid C4 ID.

## One ID for many

    from c4.tree import Tree, read_tree
    import io

    tree = Tree(identify(word.encode()) for word in ["alfa", "bravo", "charlie"])
    root = tree.id()
    copy = read_tree(io.BytesIO(tree.to_bytes()))
    assert copy.id() == root and len(copy) == 3

`Tree` sorts the IDs and removes duplicates. `rows()` returns the levels of
the tree, root first. `str(tree)` joins every node's string form.

## Store data by its ID

    from c4.store.ram import RAM
    from c4.store.validating import Validating, InvalidIDError

    store = Validating(RAM())
    with store.create(ident) as writer:
        writer.write(b"alfa")
    with store.open(ident) as reader:
        assert reader.read() == b"alfa"

The stores report errors as follows:

- Writing data that does not match its ID makes closing the writer raise
  `InvalidIDError`, and the entry is removed again.
- Reading mismatched data raises `InvalidIDError` at end of data or on close.
- `Folder` and `RAM` raise `FileExistsError` when data for an ID already
  exists, and `FileNotFoundError` when it is missing.
- `MapStore` maps IDs to existing file paths. Its helpers are `load`,
  `load_or_store`, `delete` and `items`.

`Logger(store, out, flags)` writes lines such as `<id> Open` and `<id> Read 3`
to a text stream. It also writes `<id> Read error EOF` and error lines. The
`LoggerFlags` choose what is logged. With no flags, everything except
`Remove` is logged.

## Manifests

    from c4.manifest import Manifest, file_info_from_path

    manifest = Manifest()
    manifest.set_file_info("/docs", file_info_from_path("docs"))
    manifest.set_file_info("/docs/a.txt", file_info_from_path("docs/a.txt", identify(b"...")))
    text = manifest.marshal()          # bytes

    again = Manifest()
    again.unmarshal(text)

The text form has one line per entry. Each line holds the mode, size,
RFC 3339 time, name and optional IDs. Lines are indented with one tab per
directory level. The sorted, unique IDs the entries refer to follow the
entries. `paths()` lists directories before their contents. Each
`FileInfo` can also be written to JSON with `to_json()` and read back with
`FileInfo.from_json`.

## What it does not do

There is no command-line tool. There is no database for keeping manifests.
Manifests are built in memory and serialised with `marshal` and `unmarshal`.
Storage is limited to the stores listed above.

## Tests

    pip install .[test]
    pytest