# rtfm

Browse man pages and tldr cheatsheets from the terminal.

`rtfm` reads the system's man page index by running `man -k .`. It keeps the
entries of one manual section and gives you three ways to use them.

## Installation

```
pip install .
```

The `man` program must be installed. To view tldr cheatsheets, a `tldr`
client must be on your `PATH` as well. The interactive browser uses the
standard `curses` module, so it needs a POSIX terminal.

## Usage

Start the interactive browser:

```
rtfm
```

The screen has a status bar, an input box, the command list with the
selected command's one-line description below it, and the page content on
the right.

In the command list, typing filters the commands. A command is kept when it
contains the typed text, ignoring case. Backspace removes the last
character. Up/Down, Home/End and PageUp/PageDown (50 entries at a time) move
the selection, and Enter loads the page at once. A page also loads on its
own about 0.15 seconds after the last key that changed the selection or
filter.

On the page, Up/Down scroll one line, PageUp/PageDown scroll 30 lines, and
Home/End jump to the start or to the last screenful. Headings (a first word
ending in `:`), options (`-x`), `[optional]` arguments and `<placeholders>`
are shown in colour.

| Key | Where | Action |
| --- | --- | --- |
| Tab | anywhere | switch between the command list and the page (from a search, go back to the page) |
| Esc | anywhere | return to the command list |
| `/` or `f` | page | start a new search |
| Enter | search | apply the search and return to the page |
| `n` / `N` | page | next / previous match, wrapping around |
| `t` | page | switch between man and tldr pages |
| Ctrl+Home / Ctrl+End | anywhere | jump to the top or bottom of the page |
| `q` or Ctrl+C | anywhere | quit |

A search matches page lines that contain the query, ignoring case, and
scrolls to the first match. Matching text is highlighted and the current
match is drawn in red. Because `q` always quits, it cannot be typed into the
filter or a search query.

List the commands of the section that start with a prefix:

```
rtfm getmans git
```

Show the man page of a command with your normal `man` pager:

```
rtfm getman ls
```

Use a different manual section (the default is 1):

```
rtfm --section 3 getmans str
```

`rtfm -V` prints the version and `rtfm -h` prints help. If the man page
index cannot be read, `rtfm` prints an error and exits with status 1.

## Use as a library

```python
import asyncio

from rtfm.man_db import ManDb

db = ManDb.load(1)
print(db.commands_starting_with("ls"))
print(db.get_description("ls"))
print(asyncio.run(db.get_man_page("ls"))[:5])
```

- `ManDb.load(section)` builds the index. It raises `ManDbError` when
  `man -k .` cannot be run or fails. `ManDb(commands, descriptions)` builds
  one from your own data.
- `ManDb.commands` is the sorted tuple of command names.
  `commands_starting_with(prefix)` looks them up by prefix, and
  `get_description(command)` returns the one-line description or `None`.
- `ManDb.get_man_page` and `ManDb.get_tldr_page` are coroutines. They return
  the page as a tuple of lines and cache the result per command. When a page
  cannot be loaded, the result is a single line such as
  `Failed to load man page: <command>`. That line is cached too.
- `rtfm.man_db.parse_man_index(output, section)` parses `man -k` output
  into sorted names and a description map. `load_man_page(command)` and
  `load_tldr_page(command)` fetch a page without caching and raise
  `ManDbError` on failure.
- `rtfm.trie.Trie` is the prefix tree behind `commands_starting_with`.

## Limitations

- The browser reacts to the keyboard only. It has no mouse support.
- Pages are shown as plain text lines. Long lines are cut at the edge of the
  content pane, not wrapped.