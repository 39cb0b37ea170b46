"""Simple and elegant logging setup."""
import logging
from tqdm import tqdm


class Colors:
    """ANSI color codes for prettier output."""
    CYAN = '\033[36m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    RED = '\033[31m'
    BLUE = '\033[34m'
    GRAY = '\033[37m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


class Symbols:
    """Unicode symbols for status indicators."""
    CHECK = '✓'
    CROSS = '✗'
    ARCHIVE = '\U0001F5C4'
    PAGE = '\U0001F4C4'


class SimpleFormatter(logging.Formatter):
    """Clean formatter with colors for better readability."""
    def format(self, record):
        color = {
            'DEBUG': Colors.GRAY,
            'INFO': Colors.CYAN,
            'WARNING': Colors.YELLOW,
            'ERROR': Colors.RED,
            'CRITICAL': Colors.RED + Colors.BOLD
        }.get(record.levelname, Colors.RESET)

        message = record.getMessage()
        return f"{color}{message}{Colors.RESET}"


def setup_logging(level: str = 'INFO'):
    """Configure the root logger with a single colored console handler."""
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level.upper()))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(SimpleFormatter())
    logger.addHandler(console)


class ProgressTracker:
    """Progress bar over a known list of instance files."""
    def __init__(self, steps, desc: str = 'Reading instances'):
        self.steps = steps
        self.pbar = tqdm(
            total=len(steps),
            desc=f"{Colors.BLUE}{Symbols.ARCHIVE} {desc}{Colors.RESET}",
            bar_format="{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt}"
        )
        self.current = 0

        self.status_formats = {
            'success': f"{Colors.GREEN}{Symbols.CHECK}",
            'error': f"{Colors.RED}{Symbols.CROSS}",
            'info': f"{Colors.CYAN}{Symbols.PAGE}",
        }

    def advance(self, message=None, status='success'):
        """Advance progress bar and optionally log a message."""
        if message:
            prefix = self.status_formats.get(status, '')
            self.pbar.write(f"{prefix} {message}{Colors.RESET}")
        self.current += 1
        self.pbar.update(1)

    def close(self):
        """Clean up progress bar."""
        self.pbar.write(
            f"{Colors.GREEN}{Symbols.CHECK} Read {self.current}/{len(self.steps)} instances{Colors.RESET}"
        )
        self.pbar.close()
