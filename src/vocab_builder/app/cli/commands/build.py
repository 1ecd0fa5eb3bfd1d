"""
Batch build command.
"""

import argparse
import dataclasses
import logging
from pathlib import Path

from .base import BaseCommand, print_build_summary
from ..helpers import exit_code_for, print_error
from ....config import load_build_config
from ....constants import ExitCode
from ....core import (
    AlwaysChangedTracker,
    CacheStore,
    Fetcher,
    VocabularyBuildError,
    build_user_agent,
)
from ....core.services import Orchestrator
from ....formats.rdf import FormatResolver


logger = logging.getLogger(__name__)


class BuildCommand(BaseCommand):
    """
    Build every vocabulary declared in a JSON configuration file.
    
    Usage:
        build --config <config.json> [--offline] [--output DIR] [--force]
    
    ``--offline`` and ``--output`` override the file's settings. ``--force``
    regenerates local vocabularies whether or not they changed.
    """
    
    def execute(self, args: argparse.Namespace) -> int:
        try:
            config_dict, config, specs = load_build_config(args.config)
        except FileNotFoundError as e:
            self.setup_logging_from_args(args)
            print_error(str(e))
            return ExitCode.FILE_NOT_FOUND
        except VocabularyBuildError as e:
            self.setup_logging_from_args(args)
            print_error(f"Invalid configuration {args.config}: {e.message}")
            return exit_code_for(e)
        
        log_config = config_dict.get('logging')
        self.setup_logging_from_args(args, log_config if isinstance(log_config, dict) else None)
        
        overrides = {}
        if args.offline:
            overrides['offline'] = True
        if args.output:
            overrides['output_dir'] = Path(args.output)
        if overrides:
            config = dataclasses.replace(config, **overrides)
        
        if config.offline:
            logger.info("Offline mode: remote vocabularies are skipped")
        
        cache_store = CacheStore(config.cache_dir)
        resolver = FormatResolver(config.default_mime_type)
        orchestrator = Orchestrator(
            config,
            compiler=self.get_compiler(),
            change_tracker=AlwaysChangedTracker() if args.force else None,
            cache_store=cache_store,
            resolver=resolver,
            fetcher=Fetcher(
                cache_store,
                resolver,
                user_agent=build_user_agent(config.project_name),
                session_factory=self.session_factory,
            ),
        )
        
        result = orchestrator.run(specs)
        print_build_summary(result, heading="VOCABULARY BUILD")
        
        if result.failure is not None:
            print_error(str(result.failure))
        return exit_code_for(result.failure)
