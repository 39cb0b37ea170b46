"""Read TSPLIB instances out of a directory or a zip archive."""
import gzip
import io
import logging
import zipfile
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional, Tuple

from tspkit.config import Parameters
from tspkit.models import TsplibInstance
from tspkit.parsers.tsplib import TsplibParser, instance_stem, parse_stream
from tspkit.utils.logging import ProgressTracker

logger = logging.getLogger(__name__)


class TsplibArchive:
    """
    Handle on a collection of TSPLIB files.

    ``path`` is either a directory or a ``.zip`` file. Members may be gzip-compressed. The handle
    must be opened before use, either with :meth:`open` or as a context manager::

        with TsplibArchive("ALL_tsp.zip") as archive:
            for member, instance in archive.read_all():
                ...
    """

    def __init__(self, path: Path | str, parameters: Optional[Parameters] = None):
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"TSPLIB archive not found: {path}")
        if not self.path.is_dir() and not zipfile.is_zipfile(self.path):
            raise ValueError(f"Not a directory or zip archive: {path}")

        self.parameters = parameters if parameters is not None else Parameters()
        self._zip: Optional[zipfile.ZipFile] = None
        self._members: Optional[List[str]] = None

    @property
    def is_open(self) -> bool:
        return self._members is not None

    def open(self) -> 'TsplibArchive':
        if self.is_open:
            return self

        if self.path.is_dir():
            candidates = [
                p.relative_to(self.path).as_posix() for p in self.path.rglob('*') if p.is_file()
            ]
        else:
            self._zip = zipfile.ZipFile(self.path)
            candidates = [info.filename for info in self._zip.infolist() if not info.is_dir()]

        self._members = sorted(m for m in candidates if self._is_instance(m))
        logger.info(f"Opened {self.path.name}: {len(self._members)} TSPLIB files")
        return self

    def close(self):
        if self._zip is not None:
            self._zip.close()
            self._zip = None
        self._members = None

    def __enter__(self) -> 'TsplibArchive':
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _is_instance(self, member: str) -> bool:
        name = member.lower()
        if name.endswith('.gz'):
            name = name[:-3]
        return PurePosixPath(name).suffix in self.parameters.instance_suffixes

    def _check_open(self):
        if not self.is_open:
            raise RuntimeError(f"TSPLIB archive {self.path} is not open")

    def names(self) -> List[str]:
        """Member names of every TSPLIB file, sorted."""
        self._check_open()
        return list(self._members)

    def read(self, member: str) -> TsplibInstance:
        """Parse one member, as listed by :meth:`names`."""
        self._check_open()
        if member not in self._members:
            raise KeyError(f"No TSPLIB file {member!r} in {self.path}")

        encoding = self.parameters.encoding
        if self._zip is None:
            return TsplibParser(self.path / member, encoding=encoding).parse()

        raw = self._zip.read(member)
        if member.lower().endswith('.gz'):
            raw = gzip.decompress(raw)
        return parse_stream(io.BytesIO(raw), name=instance_stem(member), encoding=encoding)

    def read_all(self) -> Iterator[Tuple[str, TsplibInstance]]:
        """Yield ``(member, instance)`` for every TSPLIB file of the archive."""
        members = self.names()
        progress = ProgressTracker(members) if self.parameters.show_progress else None
        try:
            for member in members:
                instance = self.read(member)
                if progress:
                    progress.advance(f"{member}: {instance.dimension} nodes")
                yield member, instance
        finally:
            if progress:
                progress.close()

    def __len__(self) -> int:
        return len(self.names())

    def __contains__(self, member: str) -> bool:
        return member in self.names()
