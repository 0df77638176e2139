# ledline

The editing core of an interactive line editor, with no terminal I/O. It has
these modules:

- `ledline.line_buffer`: `LineBuffer` holds the text being edited (`text`) and
  a cursor (`insertion_point`). Positions are byte offsets into the UTF-8
  encoding of the text. The cursor moves by grapheme, word and WORD, up and
  down across lines, and to or till a character. The buffer also has
  deletion, case changes and swapping.
- `ledline.navigation`: the same cursor arithmetic as plain functions of
  `(text, pos)`, for example `word_right_index`, `big_word_left_index` and
  `current_line_range`. They return byte offsets or a `TextRange`.
- `ledline.segment`: grapheme clusters and UAX #29 word boundaries, each with
  byte offsets (`grapheme_indices`, `word_bound_indices`), plus
  `is_whitespace_str` and `utf8_len`.
- `ledline.edit_stack`: `EditStack`, a linear undo/redo history.
- `ledline.clipboard`: the `Clipboard` interface, `LocalClipboard`, which
  stores its content in memory, `ClipboardMode` (`NORMAL` or `LINES`) and
  `get_default_clipboard()`.
- `ledline.keybindings`: the key events (`KeyEvent`, `KeyCode`,
  `KeyModifiers`, `MouseEvent`, `ResizeEvent`), the editor vocabulary
  (`EditCommand`, `ReedlineEvent`, `PromptEditMode`), the `EditMode`
  interface and `Keybindings` tables.
- `ledline.emacs`: the `Emacs` edit mode and `default_emacs_keybindings()`.
- `ledline.vi`, `ledline.vi_keybindings`, `ledline.vi_parser`,
  `ledline.vi_command`, `ledline.vi_motion`: the `Vi` edit mode, with its
  normal and insert modes. These modules parse normal-mode sequences such as
  `2dw`, `dd`, `fx`, `;` and `,`.

## Installation

```
pip install ledline
```

To run the tests:

```
pip install "ledline[test]"
pytest
```

## Working with a buffer

```python
from ledline.line_buffer import LineBuffer

buf = LineBuffer.from_text("This is a test")   # cursor at the end
buf.move_word_left()                            # cursor in front of "test"
buf.uppercase_word()
assert buf.text == "This is a TEST"

buf.set_buffer("line 1\nline 2")
buf.move_line_up()
assert buf.is_cursor_at_first_line()
```

Offsets are in bytes, so in `"a😇c"` the `c` is at offset 5.

```python
buf = LineBuffer.from_text("a😇c")
buf.move_to_start()
assert buf.move_right_until("c", True) == 5
```

## Undo history

```python
from ledline.edit_stack import EditStack

stack = EditStack(int)      # starts with one entry, int() == 0
stack.insert(1)
stack.insert(2)
assert stack.undo() == 1
assert stack.redo() == 2
```

If you insert after an undo, the entries that redo would have reached are
dropped.

## Key handling

```python
from ledline.emacs import Emacs
from ledline.keybindings import KeyCode, KeyEvent, KeyModifiers, ReedlineEvent

emacs = Emacs()   # default emacs keybindings
event = emacs.parse_event(KeyEvent(KeyCode.from_char("l"), KeyModifiers.CONTROL))
assert event == ReedlineEvent.CLEAR_SCREEN
```

Vi mode starts in insert mode. Esc switches it to normal mode. In normal mode
the keys build up into command sequences, and the mode returns
`ReedlineEvent.NONE` until a sequence is complete:

```python
from ledline.keybindings import EditCommand
from ledline.vi import Vi

vi = Vi()
vi.parse_event(KeyEvent(KeyCode.ESC))
assert vi.parse_event(KeyEvent(KeyCode.from_char("d"))) == ReedlineEvent.NONE
event = vi.parse_event(KeyEvent(KeyCode.from_char("w")))
assert event == ReedlineEvent.multiple(
    [ReedlineEvent.edit([EditCommand.CUT_WORD_RIGHT_TO_NEXT])]
)
```

## Custom bindings

```python
from ledline.keybindings import Keybindings, edit_bind

kb = Keybindings.empty()
kb.add_binding(
    KeyModifiers.CONTROL,
    KeyCode.from_char("x"),
    edit_bind(EditCommand.CUT_CURRENT_LINE),
)
removed = kb.remove_binding(KeyModifiers.CONTROL, KeyCode.from_char("x"))
emacs = Emacs(kb)
```

If you bind an `UNTIL_FOUND` event that holds no events, `add_binding` raises
`ValueError`.

## What this package does not do

The edit modes only translate key events into `ReedlineEvent` and
`EditCommand` values. Nothing in this package runs those commands against a
`LineBuffer`, keeps an `EditStack` or clipboard up to date, reads keys from a
terminal or draws a prompt. It also has no history store, no completion and
no menus. Your editor loop has to provide all of these.