"""
adi-parser: event-driven parser for ADI (ADIF) documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    adi-parser log.adi --format jsonl

Library Usage:
    from adi_parser import ADIParser, ADIParserDelegate

    class Printer(ADIParserDelegate):
        def on_data_specifier_start(self, parser, field_name, data_length, data_type):
            print(parser.line_number, field_name)

    parser = ADIParser("<CALL:6>JS2PBF<EOR>", Printer())
    parser.parse()
"""

from .collector import EventRecorder, RecordCollector
from .config import ADIConfig, ConfigError
from .delegate import ADIParserDelegate
from .exceptions import ADIParseError, NoDelegateError, ParseFileError
from .grammar import find_tag
from .models import ADIDocument, DataSpecifier, EventType, ParseEvent, TagMatch
from .parser import ADIParser, parse_adi, parse_file

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "ADIParser",
    "ADIParserDelegate",
    "find_tag",
    "parse_adi",
    "parse_file",
    # Delegates
    "EventRecorder",
    "RecordCollector",
    # Data models
    "ADIDocument",
    "DataSpecifier",
    "EventType",
    "ParseEvent",
    "TagMatch",
    # Configuration
    "ADIConfig",
    # Exceptions
    "ADIParseError",
    "ConfigError",
    "NoDelegateError",
    "ParseFileError",
    # Version
    "__version__",
]
