import logging
import pytest
from tspkit.utils.logging import SimpleFormatter, ProgressTracker, Colors, setup_logging

class DummyRecord(logging.LogRecord):
    def __init__(self, levelname, msg):
        super().__init__(name="test", level=getattr(logging, levelname), pathname=__file__, lineno=0, msg=msg, args=(), exc_info=None)
        self.levelname = levelname

class DummyBar:
    def __init__(self):
        self.updates = []
        self.writes = []
        self.closed = False
    def update(self, n):
        self.updates.append(n)
    def write(self, msg):
        self.writes.append(msg)
    def close(self):
        self.closed = True

@pytest.mark.parametrize("level, color", [
    ("DEBUG", Colors.GRAY),
    ("INFO", Colors.CYAN),
    ("WARNING", Colors.YELLOW),
    ("ERROR", Colors.RED),
    ("CRITICAL", Colors.RED + Colors.BOLD)
])
def test_simple_formatter_colors(level, color):
    fmt = SimpleFormatter()
    rec = DummyRecord(level, "hello")
    out = fmt.format(rec)
    assert out.startswith(color)
    assert out.endswith(Colors.RESET)
    assert "hello" in out


def test_progress_tracker_advance_and_close(monkeypatch):
    # Monkeypatch tqdm to return our DummyBar
    import tspkit.utils.logging as logging_utils
    dummy = DummyBar()
    monkeypatch.setattr(logging_utils, 'tqdm', lambda total, desc, bar_format: dummy)

    steps = ['a280.tsp', 'br17.atsp', 'alb1000.hcp']
    pt = ProgressTracker(steps)

    # Advance with message
    pt.advance("a280.tsp: 280 nodes", status='success')
    # Advance without message
    pt.advance()
    # Close
    pt.close()

    # After two advances, updates should be [1,1]
    assert dummy.updates == [1, 1]
    # Write called once for message and once on close
    assert any("a280.tsp" in w for w in dummy.writes)
    assert any("2/3" in w for w in dummy.writes)
    # Close should mark closed True
    assert dummy.closed


def test_progress_tracker_error_status_prefix(monkeypatch):
    import tspkit.utils.logging as logging_utils
    dummy = DummyBar()
    monkeypatch.setattr(logging_utils, 'tqdm', lambda total, desc, bar_format: dummy)

    pt = ProgressTracker(['x.tsp'])
    pt.advance("x.tsp failed", status='error')
    assert dummy.writes[0].startswith(Colors.RED)


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging('debug')
        setup_logging('warning')
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, SimpleFormatter)
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
