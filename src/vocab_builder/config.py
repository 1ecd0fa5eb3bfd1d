"""
Build configuration.

A ``BuildConfig`` carries the batch-wide settings the orchestrator is
constructed with. Vocabulary lists are built explicitly by the caller with
``build_spec_list``: the top-level single-vocabulary shorthand (if any) comes
first, followed by the declared ``vocabularies`` list.

Example configuration file::

    {
        "output": "build/generated-sources/vocabularies",
        "package": "myproject.vocab",
        "preferredLanguage": "en",
        "vocabularies": [
            {"url": "http://xmlns.com/foaf/0.1/index.rdf", "name": "foaf"},
            {"file": "vocab/internal.ttl", "name": "internal", "className": "INT"}
        ],
        "logging": {"level": "INFO"}
    }
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .constants import BuildLayout, GenerationConfig
from .core.errors import VocabularyBuildError
from .shared.models import VocabularySpec
from .shared.models.vocabulary import indent_for, parse_indent

logger = logging.getLogger(__name__)


@dataclass
class BuildConfig:
    """
    Batch-wide build settings.
    
    Attributes:
        output_dir: Root directory of generated modules.
        build_dir: Long-lived build directory holding the cache.
        cache_namespace: Name of the cache directory inside ``build_dir``.
        offline: Skip all remote vocabularies without network access.
        default_mime_type: Fallback media type for specs that resolve none.
        package_name: Default target package.
        preferred_language: Default label/comment language.
        indent: Indent unit of generated code.
        file_extension: Extension of generated files.
        project_name: Build context reported in the User-Agent.
    """
    output_dir: Path = Path(BuildLayout.DEFAULT_BUILD_DIR) / BuildLayout.DEFAULT_OUTPUT_SUBDIR
    build_dir: Path = Path(BuildLayout.DEFAULT_BUILD_DIR)
    cache_namespace: str = BuildLayout.DEFAULT_CACHE_NAMESPACE
    offline: bool = False
    default_mime_type: Optional[str] = None
    package_name: Optional[str] = None
    preferred_language: Optional[str] = None
    indent: str = GenerationConfig.DEFAULT_INDENT
    file_extension: str = BuildLayout.DEFAULT_FILE_EXTENSION
    project_name: Optional[str] = None
    
    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)
        self.build_dir = Path(self.build_dir)
    
    @property
    def cache_dir(self) -> Path:
        return self.build_dir / self.cache_namespace
    
    @property
    def state_file(self) -> Path:
        return self.cache_dir / BuildLayout.BUILD_STATE_FILE
    
    @classmethod
    def from_dict(
        cls,
        config_dict: Dict[str, Any],
        base_dir: Optional[Union[str, Path]] = None,
    ) -> 'BuildConfig':
        """
        Create a BuildConfig from a configuration dictionary.
        
        Relative ``output`` and ``buildDir`` paths are resolved against
        ``base_dir`` when given.
        
        Raises:
            VocabularyBuildError: CONFIGURATION for malformed values.
        """
        base = Path(base_dir) if base_dir is not None else None
        
        def _path(key: str, default: Path) -> Path:
            value = config_dict.get(key)
            if value is None:
                return default
            if not isinstance(value, str) or not value.strip():
                raise VocabularyBuildError.configuration(f"'{key}' must be a non-empty string")
            path = Path(value)
            if base is not None and not path.is_absolute():
                path = base / path
            return path
        
        build_dir = _path('buildDir', Path(BuildLayout.DEFAULT_BUILD_DIR) if base is None
                          else base / BuildLayout.DEFAULT_BUILD_DIR)
        output_dir = _path('output', build_dir / BuildLayout.DEFAULT_OUTPUT_SUBDIR)
        
        indent = parse_indent(config_dict.get('indent'))
        if indent is None:
            indent = GenerationConfig.DEFAULT_INDENT
        
        offline = config_dict.get('offline', False)
        if not isinstance(offline, bool):
            raise VocabularyBuildError.configuration(f"'offline' must be true or false, got {offline!r}")
        
        return cls(
            output_dir=output_dir,
            build_dir=build_dir,
            cache_namespace=config_dict.get('cacheNamespace') or BuildLayout.DEFAULT_CACHE_NAMESPACE,
            offline=offline,
            default_mime_type=config_dict.get('format') or None,
            package_name=config_dict.get('package') or None,
            preferred_language=config_dict.get('preferredLanguage') or None,
            indent=indent,
            project_name=config_dict.get('project') or None,
        )


def build_spec_list(
    config_dict: Dict[str, Any],
    base_dir: Optional[Union[str, Path]] = None,
) -> List[VocabularySpec]:
    """
    Build the ordered list of vocabulary specs of a configuration.
    
    The top-level shorthand (``url`` or ``file`` plus ``name``/``className``)
    comes first; ``url`` wins if both are given. Entries of the declared
    ``vocabularies`` list follow in order. Specs are not validated here.
    
    Raises:
        VocabularyBuildError: CONFIGURATION if ``vocabularies`` is not a list
            or an entry is not an object.
    """
    specs: List[VocabularySpec] = []
    
    shorthand = None
    if config_dict.get('url'):
        shorthand = {'url': config_dict['url']}
    elif config_dict.get('file'):
        shorthand = {'file': config_dict['file']}
    if shorthand is not None:
        shorthand['name'] = config_dict.get('name')
        shorthand['className'] = config_dict.get('className')
        specs.append(VocabularySpec.from_dict(shorthand, base_dir))
    
    declared = config_dict.get('vocabularies') or []
    if not isinstance(declared, list):
        raise VocabularyBuildError.configuration(
            f"'vocabularies' must be a list, got {type(declared).__name__}"
        )
    specs.extend(VocabularySpec.from_dict(entry, base_dir) for entry in declared)
    return specs


def load_build_config(config_path: Union[str, Path]) -> Tuple[Dict[str, Any], BuildConfig, List[VocabularySpec]]:
    """
    Load a JSON build configuration.
    
    Relative paths inside the file are resolved against its directory.
    
    Returns:
        Tuple of (raw configuration dict, BuildConfig, spec list).
        
    Raises:
        FileNotFoundError: If the file does not exist.
        VocabularyBuildError: CONFIGURATION if the file is not a valid
            configuration.
    """
    if not config_path:
        raise VocabularyBuildError.configuration("config_path cannot be empty")
    
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please create a configuration file or specify one with --config"
        )
    
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise VocabularyBuildError.configuration(
            f"Invalid JSON in configuration file {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise VocabularyBuildError.configuration(f"File encoding error in {path}: {e}") from e
    
    if not isinstance(config_dict, dict):
        raise VocabularyBuildError.configuration(
            f"Configuration file must contain a JSON object, got {type(config_dict).__name__}"
        )
    
    base_dir = path.parent.absolute()
    build_config = BuildConfig.from_dict(config_dict, base_dir)
    specs = build_spec_list(config_dict, base_dir)
    logger.debug(f"Loaded {len(specs)} vocabularies from {path}")
    return config_dict, build_config, specs
