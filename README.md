# tasktrack

A small command-line task manager. Tasks are kept in a JSON file at
`~/.task/tasks.json`. The `.task` directory is created if it does not exist,
and the file is rewritten after every change.

## Installation

```
pip install .
```

This installs the `task` command. It needs nothing beyond the standard library.

## Usage

Run `task` with no command to see the help.

### Adding tasks

```
task add "Complete project report"
task add "Force push to prod" --project work --priority 2 --due 2025-06-03
task add "Buy groceries" -d "milk and bread" -p private -P 3
```

Options:

- `-d`, `--description`: task description (empty by default)
- `-p`, `--project`: project name, `work` by default
- `-P`, `--priority`: 1 (Low), 2 (Medium) or 3 (High); 1 by default. Any
  other value is an error.
- `--due`: due date as `YYYY-MM-DD`. Without it the task is due one day from
  now.

A task name is required. IDs are assigned in order, one above the highest ID
in the file.

### Listing tasks

```
task list                  # incomplete tasks, basic view (ID and title)
task list --view full      # ID, status, priority, due date, project and title
task list -c               # include completed tasks
task list -p work          # only tasks in the 'work' project (case-insensitive)
task list -s priority      # sort by priority, high first
task list -s due           # sort by due date, earliest first
```

The default sort is by ID. Any `--view` other than `basic` gives the full
view. There, the status column shows ✅ for completed tasks, ⚠️ for overdue
ones and ⏳ for everything else.

If the store is empty, `task list` prints `No tasks found.`. If no task passes
the filters, it prints `No tasks match the filter criteria.`.

### Completing tasks

```
task do 1
task do 1 2 3
task do 1 --time 30        # add 30 minutes to the time spent
```

### Editing a task

```
task edit 1 --title "New title"
```

Only the title can be changed. Without `--title` the title is set to empty.

### Showing a task

```
task show 1
```

This prints the task's status, title, project, due date and time spent.

### Removing tasks

```
task remove 1
task remove 1 2 3
```

Removed tasks are deleted from the file, not marked as completed.

### Errors

A bad ID, an unknown task, a malformed date or an out-of-range priority makes
`task` print `Error executing command: ...` to standard error and exit with
status 1. When several IDs are given, the ones before the failing ID have
already been processed.

## Using it from Python

```python
import io

from tasktrack.cli import run
from tasktrack.listing import ListOptions, filter_tasks, sort_tasks, build_table_data, format_table
from tasktrack.model import Priority, Task
from tasktrack.store import JsonStore

store = JsonStore("tasks.json")
store.add_task(Task(title="Write the report", priority=Priority.HIGH))

for task in store.list_all_tasks():
    print(task.id, task.title, task.status_icon())

tasks = filter_tasks(store.list_all_tasks(), ListOptions(project_filter="work"))
sort_tasks(tasks, "priority")
print(format_table(*build_table_data(tasks, "full")), end="")

out = io.StringIO()
run(store, ["list", "--view", "full"], out)
print(out.getvalue())
```

- `tasktrack.model`: `Task` (a dataclass with `is_overdue`, `complete`,
  `add_time_spent`, `status_icon`, `to_dict` and `from_dict`) and `Priority`.
- `tasktrack.store`: the abstract `TaskRepository`, the file-backed
  `JsonStore`, and `StoreError`, which it raises when the file cannot be read,
  parsed or written, or when an unknown task is updated.
- `tasktrack.listing`: `ListOptions`, `filter_tasks`, `sort_tasks`,
  `build_table_data`, `format_table`, `priority_label` and `DisplayManager`.
- `tasktrack.cli`: `build_parser`, `run`, `default_storage_path`, `main` and
  `CommandError`.

## Limitations

- Editing covers the title only. Description, project, priority and due date
  are fixed once a task is added.
- There are no statistics or reports beyond `list` and `show`.
- The JSON file is the only storage. Other `TaskRepository` implementations
  are up to you.

## Running the tests

```
pip install ".[test]"
pytest
```