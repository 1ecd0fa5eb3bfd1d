"""
Single-vocabulary run command.
"""

import argparse
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional, Tuple

import requests

from .base import BaseCommand
from ..helpers import exit_code_for, print_error
from ....config import indent_for
from ....constants import ExitCode, ToolInfo
from ....core import CacheStore, Fetcher, VocabularyBuildError
from ....core.validators import URLValidator
from ....formats.rdf import CompileOptions, FormatResolver
from ....shared.models import VocabularySpec


logger = logging.getLogger(__name__)


class RunCommand(BaseCommand):
    """
    Generate one vocabulary module from a local file or a URL.
    
    Usage:
        run [options] <input-file-or-url> [<output-file>]
    
    A remote input is downloaded unconditionally to a temporary file that is
    removed afterwards, whatever the outcome. The output file's stem becomes
    the generated class name; without an output file the module is written
    to stdout.
    """
    
    def execute(self, args: argparse.Namespace) -> int:
        self.setup_logging_from_args(args)
        
        try:
            return self._run(args)
        except VocabularyBuildError as e:
            print_error(str(e))
            return exit_code_for(e)
        except requests.RequestException as e:
            print_error(f"Could not fetch {args.input}: {e}")
            return ExitCode.NETWORK_ERROR
        except FileNotFoundError as e:
            print_error(f"File not found: {e.filename or e}")
            return ExitCode.FILE_NOT_FOUND
        except OSError as e:
            print_error(f"I/O error: {e}")
            return ExitCode.ERROR
    
    def _run(self, args: argparse.Namespace) -> int:
        source = args.input
        remote = URLValidator.is_remote(source)
        if remote:
            try:
                URLValidator.validate_url(source)
            except ValueError as e:
                raise VocabularyBuildError.configuration(str(e)) from e
            spec = VocabularySpec(url=source, mime_type=args.mime_type)
        else:
            spec = VocabularySpec(file=Path(source), mime_type=args.mime_type)
        
        output = Path(args.output) if args.output else None
        options = CompileOptions(
            name=args.name,
            class_name=output.stem if output is not None else None,
            package_name=args.package_name,
            prefix=args.prefix,
            preferred_language=args.preferred_language,
            indent=indent_for(args.indent),
            source=source,
        )
        mime_type = FormatResolver().resolve(spec)
        
        if not remote:
            return self._generate(Path(source), mime_type, options, output)
        
        staged = self._stage(source, mime_type)
        try:
            path, content_type = self._download(source, staged)
            mime_type = FormatResolver.resolve_with_content_type(mime_type, content_type)
            return self._generate(path, mime_type, options, output)
        finally:
            staged.unlink(missing_ok=True)
    
    @staticmethod
    def _stage(url: str, mime_type: Optional[str]) -> Path:
        """Create the temporary file a remote input is downloaded into."""
        extension = FormatResolver.file_extension(mime_type)
        fd, name = tempfile.mkstemp(prefix=ToolInfo.NAME, suffix=f".{extension}")
        os.close(fd)
        logger.debug(f"Staging {url} in {name}")
        return Path(name)
    
    def _download(self, url: str, target: Path) -> Tuple[Path, Optional[str]]:
        fetcher = Fetcher(CacheStore(target.parent), session_factory=self.session_factory)
        path, content_type = fetcher.download(url, target)
        logger.info(f"Fetched {url}")
        return path, content_type
    
    def _generate(
        self,
        source: Path,
        mime_type: Optional[str],
        options: CompileOptions,
        output: Optional[Path],
    ) -> int:
        compiler = self.get_compiler()
        if output is None:
            compiler.write_stream(source, mime_type, options, sys.stdout)
            return ExitCode.SUCCESS
        
        if output.parent and not output.parent.exists():
            output.parent.mkdir(parents=True, exist_ok=True)
        compiler.write(source, mime_type, options, output)
        print(f"✓ Generated {options.class_name}: {output}")
        return ExitCode.SUCCESS
