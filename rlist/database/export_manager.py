#!/usr/bin/env python3
"""
export_manager.py
-----------------
YAML export and import of reading list entries.

The file format is a YAML sequence of mappings, one per entry:

    - name: SQLite docs
      url: https://sqlite.org/docs.html
      author: null
      topics: [databases, sqlite]
      added: '2024-03-01 18:22:05'

Export always contains every entry with its complete topic list. On
import, 'added' is informational: the store assigns a fresh timestamp.

Export Statistics:
    export_to_yaml returns a dictionary with:
    {
        "total_entries": 42,
        "duration": 0.01,  # seconds
        "output_path": "/path/to/rlist.yml" | "<stream>",
        "format": "yaml"
    }

Usage:
    exporter = ExportManager(logger=db.logger)
    stats = exporter.export_to_yaml(rlist.dump_all(), Path("rlist.yml"))

    records = exporter.load_yaml(Path("rlist.yml"))
    imported = rlist.import_entries(records)
"""
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Sequence, Union

import yaml

from rlist.core.exceptions import ExportError, ValidationError
from rlist.core.logging_manager import RlistLogger, safe_logger
from rlist.dataclasses.reading_entry import ReadingEntry


class ExportManager:
    """
    Handles YAML export and import of entries.
    """

    def __init__(self, logger: Optional[RlistLogger] = None) -> None:
        """
        Initialize export manager.

        Args:
            logger: Optional logger for export operations
        """
        self.logger = logger

    @staticmethod
    def dump_yaml(entries: Sequence[ReadingEntry]) -> str:
        """Serialize entries to the YAML export format."""
        return yaml.safe_dump(
            [entry.to_dict() for entry in entries],
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

    def export_to_yaml(
        self,
        entries: Sequence[ReadingEntry],
        output: Union[Path, str, IO[str]],
    ) -> Dict[str, Any]:
        """
        Write entries as YAML to a file or an open text stream.

        Args:
            entries: Entries to export
            output: Destination path, or a writable text stream

        Returns:
            Dictionary with export statistics

        Raises:
            ExportError: If the destination cannot be written
        """
        start_time = datetime.now()
        content = self.dump_yaml(entries)

        if isinstance(output, (str, Path)):
            output_path = Path(output).expanduser()
            try:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(content, encoding="utf-8")
            except OSError as e:
                safe_logger(self.logger).log_error(
                    e, {"operation": "export_to_yaml", "output_path": str(output_path)}
                )
                raise ExportError(f"Cannot write export file {output_path}: {e}") from e
            destination = str(output_path)
        else:
            output.write(content)
            destination = "<stream>"

        stats = {
            "total_entries": len(entries),
            "duration": (datetime.now() - start_time).total_seconds(),
            "output_path": destination,
            "format": "yaml",
        }
        safe_logger(self.logger).log_operation("export_to_yaml", stats)
        return stats

    def load_yaml(self, input_path: Union[Path, str]) -> List[Any]:
        """
        Read the records of a YAML export file.

        Records are returned as parsed; validating each one is left to the
        importer so that a bad record can be skipped on its own.

        Args:
            input_path: Path of the file to read

        Returns:
            List of records (normally mappings); empty for an empty file

        Raises:
            ExportError: If the file cannot be read
            ValidationError: If the file is not YAML or not a list
        """
        path = Path(input_path).expanduser()
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Cannot read import file {path}: {e}") from e

        try:
            records = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValidationError(f"Import file {path} is not valid YAML: {e}") from e

        if records is None:
            return []
        if not isinstance(records, list):
            raise ValidationError(
                f"Import file {path} must contain a list of entries, "
                f"got {type(records).__name__}"
            )

        safe_logger(self.logger).log_debug(
            "Loaded import file", {"path": str(path), "records": len(records)}
        )
        return records
