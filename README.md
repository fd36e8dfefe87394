# envfixer

`envfixer` is a library that repairs the usual mistakes in `.env` files.
You give it the lines of a file together with the warnings reported for
them, and it rewrites those lines in place.

## What it fixes

Each kind of problem is a member of `envfixer.entries.LintKind`. Each fixer
handles one kind:

| Problem                                    | Fixer                      | Module        |
|--------------------------------------------|----------------------------|---------------|
| `FOO` with no `=`                          | `KeyWithoutValueFixer`     | `line_fixers` |
| lowercase key (`foo=bar`)                  | `LowercaseKeyFixer`        | `line_fixers` |
| spaces around `=` (`FOO = bar`)            | `SpaceCharacterFixer`      | `line_fixers` |
| trailing whitespace                        | `TrailingWhitespaceFixer`  | `line_fixers` |
| invalid leading character (`.FOO`, `1FOO`) | `LeadingCharacterFixer`    | `line_fixers` |
| quotes in the value                        | `QuoteCharacterFixer`      | `line_fixers` |
| wrong delimiter in a key (`RAILS-ENV`)     | `IncorrectDelimiterFixer`  | `line_fixers` |
| repeated blank lines                       | `ExtraBlankLineFixer`      | `line_fixers` |
| malformed substitutions (`${BAR`)          | `SubstitutionKeyFixer`     | `line_fixers` |
| keys out of alphabetical order             | `UnorderedKeyFixer`        | `ordering`    |
| duplicated keys (later ones commented out) | `DuplicatedKeyFixer`       | `fixing`      |
| missing blank line at the end of the file  | `EndingBlankLineFixer`     | `fixing`      |

Every fixer derives from `envfixer.line_fixers.Fixer` and offers
`fix_warnings(warning_lines, lines)`, which fixes the entries with the given
line numbers and returns how many it fixed. It raises `LookupError` when a
line number has no entry.

Keys are sorted within groups separated by blank lines or control comments.
A comment moves together with the line below it. A line that uses a variable
defined earlier in its group stays after it and gets a
`# Unordered because ...` comment appended.

Control comments switch the ordering and duplicate fixes off and on for part
of a file:

```
# dotenv-linter:off UnorderedKey
B=2
A=1
# dotenv-linter:on UnorderedKey
```

## Parsing lines

```python
from envfixer.entries import parse_lines

lines = parse_lines(["FOO=bar", "MULTI='first", "second'", "\n"])
for entry in lines:
    print(entry.number, entry.key(), entry.value())
```

`parse_lines` numbers the lines from 1. It joins quoted values that span
several lines into one `LineEntry`. A `LineEntry` offers `key()`,
`value()`, `is_empty()`, `is_comment()`, `control_comment()` and
`substitution_keys()`.

By convention the last entry is a lone `"\n"`, which stands for the file's
final newline. `write_file` relies on this.

## Running the fixers

```python
from envfixer.entries import LintKind, Warning, parse_lines
from envfixer.fixing import run
from envfixer.fs_utils import backup_file, write_file

lines = parse_lines(["foo=bar", "A=1", "\n"])
warnings = [Warning(1, LintKind.LOWERCASE_KEY, "The foo key should be in uppercase")]

fixed = run(warnings, lines, skip_checks=[])   # 1
backup_file(".env")
write_file(".env", lines)                      # writes "A=1\nFOO=bar\n"
```

`run` goes through `fix_list()` in order: the single-line fixers first, then
the ones that work on the whole file. A fixer runs when it has warnings to
handle. The ordering and duplicate fixers always run, because earlier fixes
can create work for them.

When the fixers are done, `run` drops the lines marked as deleted and
returns the number of fixes. If it gets no warnings, it returns 0 and changes
nothing. It also returns 0 if a warning names a line that does not exist.

To leave some problems alone, pass their `LintKind` members in
`skip_checks`.

## File helpers

`envfixer.fs_utils` provides:

- `backup_file(path)` copies a file next to itself as
  `<name>_<unix-timestamp>.bak` and returns the new path.
- `write_file(path, lines)` writes every entry except the last, one per line.
- `get_relative_path(target, base)` returns `target` relative to `base`,
  using `..` where needed.
- `canonicalize(path)` returns the absolute path with links resolved. The
  path must exist.

## Comparing files

```python
from envfixer.compare import compare_files

for warning in compare_files([".env", ".env.example"]):
    print(f"{warning.path} is missing keys: {', '.join(warning.missing_keys)}")
```

Every file that lacks a key defined in any of the others gets a
`CompareWarning`. `compare_files` skips paths that are not existing files and
reads a file named twice only once. `read_keys(path)` lists the keys of one
file.

## What it does not do

- `envfixer` does not detect problems. The `Warning` objects must come from
  elsewhere.
- There is no command-line program.
- It does not search directories for `.env` files.
- It does not print reports.