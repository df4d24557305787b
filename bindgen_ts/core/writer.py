"""
File Writer for generated bindings
"""

import logging
from pathlib import Path
from typing import Optional, Union

from bindgen_ts.core.errors import BindingWriteError


logger = logging.getLogger(__name__)


def write_generated_file(path: Union[str, Path], content: str, entity: Optional[str] = None) -> Path:
    """
    Create the parent directory if missing and overwrite the file.

    Directory creation tolerates concurrent or repeated calls. Two writers
    targeting the same file race with last-writer-wins.

    Raises:
        BindingWriteError: directory creation or the write failed
    """
    file_path = Path(path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(content)
    except OSError as e:
        raise BindingWriteError(str(file_path), e, entity=entity) from e

    logger.debug(f"Generated: {file_path}")
    return file_path
