"""Archive extraction command"""

import tarfile

import click

from ...core.exceptions import ExtractionError, PathTraversalError
from ...processing.extractor import extract_file
from ..console import fatal, info


@click.command()
@click.argument('archive')
@click.argument('destination', type=click.Path(file_okay=False))
def extract(archive, destination):
    """Extract a tar archive into DESTINATION, refusing path traversal

    ARCHIVE may be '-' to read from standard input.

    Examples:
        scangate extract image.tar ./layers
        docker save app:1 | scangate extract - ./layers
    """
    try:
        count = extract_file(archive, destination)
    except PathTraversalError as e:
        fatal(f"Refusing to extract entry {e.entry_name!r} from {archive}", e)
    except (ExtractionError, tarfile.TarError, OSError) as e:
        fatal(f"Could not extract {archive}", e)

    info(f"Extracted {count} entries into {destination}")
