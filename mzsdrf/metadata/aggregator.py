# mzsdrf/metadata/aggregator.py
import logging
from typing import Dict, Iterable, List

from ..core.exceptions import MissingAssociationError
from ..sdrf.model import SampleRow

logger = logging.getLogger(__name__)


def organize_by_data_file(rows: Iterable[SampleRow]) -> Dict[str, List[SampleRow]]:
    """
    Re-arrange SDRF rows into groups keyed by their ``comment[data file]``.

    Row order is preserved within each group and every row lands in exactly
    one group.

    Raises:
        MissingAssociationError: If a row has no data file comment
    """
    index: Dict[str, List[SampleRow]] = {}
    for row in rows:
        data_file = row.data_file()
        if data_file is None:
            raise MissingAssociationError(row.index, row.name)
        index.setdefault(data_file, []).append(row)

    logger.debug(f"Grouped SDRF rows into {len(index)} data files")
    return index
