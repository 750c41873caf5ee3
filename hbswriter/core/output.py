from pathlib import Path
import structlog
from hbswriter.exceptions import OutputError

log = structlog.get_logger(__name__)

def write_to_file(output_file_path: Path, text_content: str):
    # writes text content to the specified file path, creating parent directories.
    log.debug("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.parent.mkdir(parents=True, exist_ok=True)
        output_file_path.write_text(text_content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e
