# todolist

A small command-line tool for keeping a todo list. Items are stored in a CSV file. Unless you give another path, the file is `todo.csv` in the current directory. The file is created if it does not exist, and it is locked while it is read or written on systems that support `flock`.

## Installation

```
pip install .
```

## Usage

Add a task. It gets the next id, which is the number of items already in the list plus one, and the status `ToDo`:

```
todo-cli add "Write the quarterly report"
```

Add a task under a parent task, giving the parent's id:

```
todo-cli add --parent 1 "Collect the sales figures"
```

Mark a task as done, giving its id. Its status becomes `Done` and the current time is recorded. If no item has that id, the list is saved unchanged:

```
todo-cli complete 2
```

Show the list as an aligned table:

```
todo-cli list
```

The table has the columns ID, Task, Status, Created, Due and Done. Times are shown as `YYYY-MM-DD hh:mm` on a 12-hour clock with no AM/PM marker. The Due and Done columns are empty when those times are not set.

Running `todo-cli` with no command prints the help.

### Options

These can be given before or after the command:

- `--file PATH`: the todo file to use (default `todo.csv`). For `add` and `complete`, the storage format comes from the file's extension, and only `.csv` is accepted. Other extensions are reported as errors. `list` always reads the file as CSV.
- `--config PATH`: a YAML config file. Without it, `~/.todo-cli.yaml` is tried. When a config file is read, its path is printed to standard error. Its contents are not used for anything yet.
- `--json FORMAT`: accepted, but it has no effect at present.

`todo-cli` also accepts `-t/--toggle` before the command. It has no effect.

If the file cannot be read or decoded, the command prints `todo-cli: <message>` to standard error and exits with status 1.

### The file format

Each line of the CSV file is one item with eight fields:

1. id
2. parent id
3. child ids, as a list such as `[]` or `[3,4]`
4. task text
5. created time
6. due time
7. done time
8. status as a number: 0 for `ToDo`, 1 for `InProgress`, 2 for `Done`

Times are written in RFC 3339 form, for example `2025-03-01T09:30:00+01:00`. A time that is not set is written as `0001-01-01T00:00:00Z`.

## Using it from Python

- `todolist.models` holds `TodoItem`, a dataclass with the fields `id`, `task`, `parent_id`, `children_ids`, `created_at`, `due`, `done_at` and `status`. Unset times are `None`. The same module holds `Status`, an `IntEnum` with the members `TODO`, `IN_PROGRESS` and `DONE`. Their text forms are `ToDo`, `InProgress` and `Done`.
- `todolist.store` holds the storage layer:
  - `new_store(path)` returns a `CSVData` handler for `.csv` paths. Any other extension raises `UnsupportedFormatError`.
  - `CSVData(path)` has `load()` and `save(items)`. It is a `DataHandler`.
  - `encode_records(todos)` and `decode_records(records)` convert between items and CSV records.
  - Problems with reading, decoding or writing raise `StoreError`.
- `todolist.cli` holds the functions behind the commands: `add_todo(path, task, parent_id=0, now=None)`, `complete_todo(path, todo_id, now=None)`, `list_todos(path, stream=None)`, `format_time(value)`, `load_config(path)`, `build_parser()` and `main(argv=None)`.
- `todolist.table.TabTable(stream=None)` lines up columns:
  - `add_line(*args)` adds a row.
  - `add_header(*args)` adds a row with dashes under it.
  - `render()` returns the aligned text.
  - `flush()` writes the table to the stream, or to standard output when no stream was given, and clears it.

## What it does not do

- Items can only be stored as CSV. Paths ending in `.json` or `.sqlite` are refused as not supported yet.
- There is no command to set a due date, to mark a task as in progress, or to edit or delete a task.
- The configuration file is read but its settings are not applied.

## Running the tests

```
pip install .[test]
pytest
```