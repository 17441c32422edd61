import json

from main import main
from timebox.utils.task_io import load_tasks


def run(tmp_path, *args):
    tasks_path = tmp_path / "tasks.json"
    argv = [
        *args,
        "--tasks", str(tasks_path),
        "--config", str(tmp_path / "missing.yaml"),
        "--date", "2025-03-10",
    ]
    return main(argv), tasks_path


def test_parse_stores_draft(tmp_path, capsys):
    code, tasks_path = run(tmp_path, "parse", "Schedule team sync tomorrow at 2 PM for 1 hour")
    assert code == 0
    assert 'Added "Team sync"' in capsys.readouterr().out
    tasks = load_tasks(str(tasks_path))
    assert len(tasks) == 1
    assert tasks[0].start_time.isoformat() == "2025-03-11T14:00:00"


def test_parse_conflict_is_not_stored(tmp_path, capsys):
    run(tmp_path, "parse", "Team sync tomorrow at 2 PM")
    code, tasks_path = run(tmp_path, "parse", "Client call tomorrow at 2:30 PM")
    assert code == 1
    assert "already taken" in capsys.readouterr().out
    assert len(load_tasks(str(tasks_path))) == 1


def test_add_warns_about_overlap(tmp_path, capsys):
    run(tmp_path, "add", "Planning", "--start", "09:00", "--end", "10:00")
    code, tasks_path = run(tmp_path, "add", "Dentist", "--start", "09:30", "--end", "10:30",
                           "--category", "health")
    assert code == 0
    out = capsys.readouterr().out
    assert 'Warning: overlaps "Planning"' in out
    assert len(load_tasks(str(tasks_path))) == 2


def test_add_rejects_inverted_interval(tmp_path, capsys):
    code, tasks_path = run(tmp_path, "add", "Oops", "--start", "11:00", "--end", "10:00")
    assert code == 1
    assert "Error" in capsys.readouterr().err
    assert not tasks_path.exists()


def test_free_slots_output(tmp_path, capsys):
    run(tmp_path, "add", "Planning", "--start", "09:00", "--end", "10:00")
    capsys.readouterr()
    code, _ = run(tmp_path, "free-slots")
    assert code == 0
    out = capsys.readouterr().out
    assert "08:00 – 09:00" in out
    assert "10:00 – 22:00" in out


def test_complete_and_stats(tmp_path, capsys):
    _, tasks_path = run(tmp_path, "add", "Planning", "--start", "09:00", "--end", "10:00")
    task_id = json.loads(tasks_path.read_text(encoding="utf-8"))[0]["id"]

    code, _ = run(tmp_path, "complete", task_id)
    assert code == 0
    assert load_tasks(str(tasks_path))[0].completed

    capsys.readouterr()
    run(tmp_path, "stats")
    out = capsys.readouterr().out
    assert "Completion rate: 100%" in out
    assert "work: 1" in out


def test_complete_unknown_task(tmp_path, capsys):
    code, _ = run(tmp_path, "complete", "nope")
    assert code == 1
    assert "Task not found" in capsys.readouterr().err


def test_remind_once_with_nothing_due(tmp_path, capsys):
    code, _ = run(tmp_path, "remind")
    assert code == 0
    assert "No reminders due" in capsys.readouterr().out


def test_offset_timestamp_in_task_file_is_reported(tmp_path, capsys):
    tasks_path = tmp_path / "tasks.json"
    tasks_path.write_text(json.dumps([{
        "id": "utc",
        "title": "Standup",
        "start_time": "2025-03-11T09:00:00+00:00",
        "end_time": "2025-03-11T09:30:00+00:00",
    }]), encoding="utf-8")
    code, _ = run(tmp_path, "parse", "Team sync tomorrow at 2 PM")
    assert code == 1
    assert "UTC offset" in capsys.readouterr().err
