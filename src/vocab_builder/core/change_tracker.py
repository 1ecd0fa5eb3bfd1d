"""
Change tracking for local vocabulary files.

The orchestrator asks a ``ChangeTracker`` whether a local source changed since
the last successful build of a given target module and skips the spec if it
did not. Trackers that also implement ``BuildRecorder`` are told about every
successful build so they can update their state.

Implementations:
    AlwaysChangedTracker: every file counts as changed (forced rebuilds)
    BuildStateTracker: compares file mtime/size against a JSON state file
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, Union, runtime_checkable

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@runtime_checkable
class ChangeTracker(Protocol):
    """Reports whether a local file changed since it last built ``target``."""
    
    def has_changed_since(self, path: PathLike, target: Optional[PathLike] = None) -> bool:
        ...


@runtime_checkable
class BuildRecorder(Protocol):
    """Receives notice of a successful build of ``target`` from a local file."""
    
    def record_build(self, path: PathLike, target: Optional[PathLike] = None) -> None:
        ...


class AlwaysChangedTracker:
    """Tracker without memory: every file is reported as changed."""
    
    def has_changed_since(self, path: PathLike, target: Optional[PathLike] = None) -> bool:
        return True


class BuildStateTracker:
    """
    Track local vocabulary files across runs.
    
    State is a JSON object mapping each (source, target) pair to the source's
    ``[mtime_ns, size]`` at the time the target was built, written after every
    recorded build. One source can feed several targets, and each pair is
    tracked on its own. A source counts as changed for a target if the pair
    was never recorded, if the target file is missing, or if the source's
    modification time or size differ from the recorded values.
    
    Args:
        state_file: Location of the JSON state file.
    """
    
    def __init__(self, state_file: PathLike) -> None:
        self.state_file = Path(state_file)
        self._state: Dict[str, list] = self._load()
    
    def _load(self) -> Dict[str, list]:
        if not self.state_file.is_file():
            return {}
        try:
            with open(self.state_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable build state {self.state_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed build state {self.state_file}")
            return {}
        return data
    
    @staticmethod
    def _key(path: PathLike, target: Optional[PathLike]) -> str:
        source = str(Path(path).absolute())
        if target is None:
            return source
        return f"{source} -> {Path(target).absolute()}"
    
    @staticmethod
    def _signature(path: PathLike) -> list:
        stat = os.stat(path)
        return [stat.st_mtime_ns, stat.st_size]
    
    def has_changed_since(self, path: PathLike, target: Optional[PathLike] = None) -> bool:
        if target is not None and not Path(target).is_file():
            return True
        recorded = self._state.get(self._key(path, target))
        if not isinstance(recorded, list):
            return True
        try:
            return self._signature(path) != recorded
        except OSError:
            return True
    
    def record_build(self, path: PathLike, target: Optional[PathLike] = None) -> None:
        """
        Remember the current state of ``path`` for ``target``.
        
        Raises:
            OSError: If the source cannot be read or the state file cannot
                be written.
        """
        self._state[self._key(path, target)] = self._signature(path)
        self.state_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.state_file, 'w', encoding='utf-8') as f:
            json.dump(self._state, f, indent=2, sort_keys=True)
