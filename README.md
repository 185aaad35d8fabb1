# textforge

textforge is a set of building blocks for a text editor. An editor front end
can sit on top of it, or you can use the pieces on their own:

- **`textforge.core`**: text buffers, documents that handle line endings,
  a multi-document `Editor`, line/column helpers and an asynchronous event
  dispatcher.
- **`textforge.syntax`**: language definitions for Rust, Python and JavaScript,
  which you can look up by name or by file extension, and colour themes for
  highlighting.
- **`textforge.plugin`**: plugin manifests, a permission sandbox, a registry,
  a loader that finds plugin directories on disk, and a manager that runs
  plugins through their lifecycle.
- **`textforge.lsp`**: a registry of language server configurations, keyed
  by language id.

The package has no runtime dependencies and needs Python 3.10 or later.
To run the test suite, install the `test` extra, which adds pytest and
pytest-asyncio.

## Documents and buffers

```python
from textforge.core.document import Document, LineEnding

doc = Document("notes.txt")
doc.insert(0, "Hello")
doc.insert(5, ", World!")
doc.delete(5, 7)
print(doc.text)      # HelloWorld!
print(doc.version)   # 3
print(doc.is_dirty)  # True
print(doc.language)  # txt

LineEnding.detect("a\r\nb")             # LineEnding.WINDOWS
LineEnding.UNIX.normalize("a\r\nb\rc")  # "a\nb\nc"
```

`insert` and `delete` take character offsets. An offset outside the text
raises `textforge.core.errors.TextBufferError`.

`Document.from_file(path)` opens a UTF-8 file. It records the path and
detects the file's line ending. `save()` writes the text back with the
document's line ending applied. A document that has no path is not written.
`normalize_line_endings(style)` converts the text in memory.

`Buffer` (in `textforge.core.buffer`) is the plain text store that a document
sits on. `len(buffer)` gives the length of the text in UTF-8 bytes.

## Positions in text

```python
from textforge.core.text import Position, position_to_offset, offset_to_position, line_count

text = "Hello\nWorld\nRust"
position_to_offset(text, Position(line=1, column=2))  # 8
offset_to_position(text, 8)                            # Position(line=1, column=2)
line_count(text)                                       # 3
```

Offsets here are byte offsets into the UTF-8 encoding of the text. A position
that does not exist returns `None`.

## Managing several documents

```python
from textforge.core.editor import Editor

editor = Editor()
editor.new_document("a.txt")
editor.new_document("b.txt")
editor.set_active_document("a.txt")
editor.close_document("b.txt")
print(editor.document_names())      # ['a.txt']
print(editor.active_document.name)  # a.txt
```

Selecting or closing a document that is not open raises
`textforge.core.errors.DocumentError`. If you close the active document,
`active_document` becomes `None`.

## Events

`EventDispatcher` sends each event to every receiver that is subscribed at
the time. Events are frozen dataclasses such as `DocumentOpened`,
`TextInserted` or `BufferModified`. To handle them, wrap a receiver in
`EventSubscription`, give it an `EventHandler`, and run `listen()` as an
asyncio task:

```python
import asyncio
from textforge.core.events import (
    DocumentOpened, EventDispatcher, EventHandler, EventSubscription,
)

class Printer(EventHandler):
    async def handle(self, event):
        print(event)

async def run():
    dispatcher = EventDispatcher()
    subscription = EventSubscription(dispatcher.subscribe()).with_handler(Printer())
    task = asyncio.create_task(subscription.listen())
    dispatcher.dispatch(DocumentOpened(name="test.txt"))
    dispatcher.close()
    await task

asyncio.run(run())
```

Each receiver holds at most `capacity` events. If a receiver falls behind,
the oldest events are dropped and `recv()` raises `Lagged`. After the
dispatcher is closed and the receiver has drained its events, `recv()` raises
`ChannelClosed`. `event_to_dict` and `event_from_dict` convert events to and
from plain dictionaries.

## Syntax languages and themes

```python
from textforge.syntax.language import init, get_language, get_language_by_extension
from textforge.syntax.theme import Theme, Color

init()
print(get_language_by_extension(".py").config.name)  # Python
print(get_language("rust").config.comments.line)     # //

theme = Theme.dark_theme()
print(theme.get_style("keyword").bold)  # True
print(Color.from_hex("#FF0000"))        # Color(r=255, g=0, b=0)
```

`Theme.to_dict` and `Theme.from_dict` convert themes to and from
JSON-compatible data, and so does `LanguageConfig`.

## Plugins

- **Manifest.** Each plugin lives in its own directory, which holds a
  `plugin.json` manifest. `PluginManifest.from_json` reads a manifest and
  checks that every field is present.
- **Loader.** `PluginLoader` reads the manifests. Before it can load any
  plugin, give it a factory for each plugin type with
  `register_factory(PluginType.NATIVE, factory)`. The factory is called with
  the plugin directory and its `PluginConfig`. `discover()` loads every plugin
  directory under the search paths and skips any that fail to load.
- **Manager.** `PluginManager` is asynchronous. It registers plugins and
  moves them from loaded to running to disabled. It also runs plugin commands
  and puts each change on the queues returned by `subscribe()`.
- **Sandbox.** `Sandbox` checks the paths, hosts, ports and commands that a
  plugin asks for against a `SandboxConfig`, and raises `SandboxError` at the
  first request that is not allowed. `enforce_limits()` sets resource limits
  on the current process.

## Language server configuration

```python
from textforge.lsp.config import init, get_server

init()
print(get_server("python").command)  # pylsp
```

`register_server` adds or replaces the configuration for a language id.

## What is not included

- textforge contains no syntax highlighter or parser. Themes describe styles,
  but nothing in the package applies them to source text.
- It does not load plugins from shared libraries or WebAssembly. You supply
  those loaders as factories.
- It has no language server, no LSP message types and no command-line
  program. The `textforge.lsp` package only holds the configurations that
  say which server to start for each language.