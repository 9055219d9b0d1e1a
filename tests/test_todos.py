"""
Tests for the pending todo scan.
"""

from gsdtools.core.todos import parse_todo, scan_todos


def _write_todo(project, filename, content):
    pending = project / ".planning" / "todos" / "pending"
    pending.mkdir(parents=True, exist_ok=True)
    path = pending / filename
    path.write_text(content)
    return path


class TestScanTodos:
    """scan_todos over .planning/todos/pending/."""

    def test_no_todos_dir(self, project):
        scan = scan_todos(project)
        assert scan.todo_count == 0
        assert scan.todos == []
        assert scan.todos_dir_exists is False
        assert scan.pending_dir_exists is False

    def test_empty_pending_dir(self, project):
        (project / ".planning" / "todos" / "pending").mkdir(parents=True)
        scan = scan_todos(project)
        assert scan.todo_count == 0
        assert scan.todos_dir_exists is True
        assert scan.pending_dir_exists is True

    def test_reads_fields(self, project):
        _write_todo(project, "task-1.md", "title: Fix bug\narea: backend\ncreated: 2026-01-01\n")
        scan = scan_todos(project)
        assert scan.todo_count == 1
        todo = scan.todos[0]
        assert todo.title == "Fix bug"
        assert todo.area == "backend"
        assert todo.created == "2026-01-01"
        assert todo.file == "task-1.md"
        assert todo.path == ".planning/todos/pending/task-1.md"

    def test_frontmatter_style(self, project):
        _write_todo(
            project, "fm.md",
            "---\ncreated: 2026-02-25\ntitle: Fix login redirect\narea: auth\n---\n\nBody text\n",
        )
        todo = scan_todos(project).todos[0]
        assert todo.title == "Fix login redirect"
        assert todo.area == "auth"

    def test_area_filter(self, project):
        _write_todo(project, "a.md", "title: Backend task\narea: backend\n")
        _write_todo(project, "b.md", "title: Frontend task\narea: frontend\n")
        scan = scan_todos(project, area="backend")
        assert scan.todo_count == 1
        assert scan.todos[0].title == "Backend task"
        assert scan.area_filter == "backend"

    def test_area_filter_is_exact(self, project):
        _write_todo(project, "a.md", "title: A\narea: backend-api\n")
        assert scan_todos(project, area="backend").todo_count == 0

    def test_missing_fields_default(self, project):
        _write_todo(project, "bare.md", "Just some notes\n")
        todo = scan_todos(project).todos[0]
        assert todo.title == "Untitled"
        assert todo.area == "general"
        assert todo.created == "unknown"

    def test_default_area_matches_filter(self, project):
        _write_todo(project, "bare.md", "title: No area\n")
        assert scan_todos(project, area="general").todo_count == 1

    def test_non_markdown_ignored(self, project):
        _write_todo(project, "task.md", "title: Real\n")
        _write_todo(project, "notes.txt", "title: Not a todo\n")
        scan = scan_todos(project)
        assert [t.file for t in scan.todos] == ["task.md"]

    def test_undecodable_file_still_counts(self, project):
        _write_todo(project, "ok.md", "title: OK\n")
        pending = project / ".planning" / "todos" / "pending"
        (pending / "binary.md").write_bytes(b"\xff\xfe\xfa")
        scan = scan_todos(project)
        assert scan.todo_count == 2
        binary = next(t for t in scan.todos if t.file == "binary.md")
        assert binary.title == "Untitled"

    def test_to_dict(self, project):
        _write_todo(project, "t.md", "title: T\narea: ops\ncreated: 2026-03-01\n")
        data = scan_todos(project).to_dict()
        assert data["todo_count"] == 1
        assert data["area_filter"] is None
        assert data["todos"][0] == {
            "file": "t.md",
            "created": "2026-03-01",
            "title": "T",
            "area": "ops",
            "path": ".planning/todos/pending/t.md",
        }


class TestParseTodo:
    """parse_todo on raw text."""

    def test_empty_value_is_default(self):
        todo = parse_todo("title:\narea: ops\n", "x.md", "x.md")
        assert todo.title == "Untitled"
        assert todo.area == "ops"

    def test_first_occurrence_wins(self):
        todo = parse_todo("title: First\ntitle: Second\n", "x.md", "x.md")
        assert todo.title == "First"

    def test_key_must_start_line(self):
        todo = parse_todo("subtitle: nope\n", "x.md", "x.md")
        assert todo.title == "Untitled"

    def test_none_content(self):
        todo = parse_todo(None, "x.md", "x.md")
        assert todo.created == "unknown"
