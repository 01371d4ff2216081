from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence
import json
import time

import pandas as pd

from ..schemas.filter import FilterError, FilterGroup
from ..utils.logger import setup_logger
from ..config import settings

logger = setup_logger("export_service", settings.logging.FILTER_LOG_FILE)


class ExportService:
    """Serialises filtered records to downloadable JSON or CSV"""

    def __init__(self, list_separator: str = None, filename_prefix: str = None):
        self.list_separator = list_separator or settings.filter.CSV_LIST_SEPARATOR
        self.filename_prefix = filename_prefix or settings.filter.EXPORT_FILENAME_PREFIX

    def export_filename(self, extension: str) -> str:
        return f"{self.filename_prefix}-{int(time.time() * 1000)}.{extension}"

    def to_json(self, records: Sequence[Mapping[str, Any]], group: Optional[FilterGroup] = None) -> str:
        """JSON document with export metadata and the filters that produced it"""
        payload = {
            "exportDate": datetime.now(timezone.utc).isoformat(),
            "recordCount": len(records),
            "filters": group.model_dump(mode="json", by_alias=True) if group else None,
            "data": list(records),
        }
        logger.info(f"Exporting {len(records)} records as JSON")
        return json.dumps(payload, indent=2, default=str)

    def flatten(self, records: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
        """One column per dotted key; list cells joined into a single string"""
        frame = pd.json_normalize(list(records), sep=".")
        for column in frame.columns:
            frame[column] = frame[column].map(self._join_list)
        return frame

    def to_csv(self, records: Sequence[Mapping[str, Any]]) -> str:
        if not records:
            raise FilterError("No data to export", error_code="empty_export")

        frame = self.flatten(records)
        logger.info(f"Exporting {len(frame)} records as CSV with {len(frame.columns)} columns")
        return frame.to_csv(index=False)

    def _join_list(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return self.list_separator.join(str(item) for item in value)
        return value


export_service = ExportService()
