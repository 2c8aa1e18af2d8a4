"""Full scan command: extract image, then gate its report"""

import os
import shutil
import sys
import tarfile

import click

from ...core.exceptions import ExtractionError, PathTraversalError
from ...processing.extractor import create_tmp_path, extract_file
from ...processing.signals import SignalListener
from ..console import fatal, notice, warning
from .check import apply_policy_options, build_processor, run_gate


def _remove_tmp_path(tmp_path: str):
    shutil.rmtree(tmp_path, ignore_errors=True)


@click.command()
@click.argument('image_archive')
@click.argument('report')
@click.option('--image', '-i', required=True, help='Name of the scanned image')
@click.option('--threshold', '-t', help='Minimum severity that fails the scan')
@click.option('--whitelist', '-w', type=click.Path(), help='Path to the whitelist YAML file')
@click.option('--format', type=click.Choice(['table', 'json', 'csv']), default='table', help='Output format')
@click.option('--output', '-o', help='Output file path')
@click.option('--report-all', is_flag=True, help='Report all vulnerabilities, not only unapproved ones')
@click.option('--keep-layers', is_flag=True, help='Keep the extracted image in its scratch directory')
@click.pass_context
def scan(ctx, image_archive, report, image, threshold, whitelist, format, output, report_all, keep_layers):
    """Extract IMAGE_ARCHIVE to a scratch directory and gate REPORT

    The scratch directory is removed when the scan finishes or when an
    interrupt or quit signal arrives.

    Examples:
        scangate scan app.tar report.json --image app:1 --threshold High
        docker save app:1 | scangate scan - report.json --image app:1
    """
    config = ctx.obj['config']
    apply_policy_options(config, threshold, whitelist)

    # Policy errors abort before anything touches the disk
    processor = build_processor(config)

    tmp_path = None
    try:
        tmp_path = create_tmp_path(config.tmp_prefix)
    except ExtractionError as e:
        fatal("Could not prepare scratch directory", e)

    def cleanup(signum):
        warning(f"Interrupted, removing {tmp_path}")
        _remove_tmp_path(tmp_path)
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(1)

    listener = SignalListener()
    with listener:
        listener.start(cleanup)
        try:
            count = extract_file(image_archive, tmp_path)
        except PathTraversalError as e:
            _remove_tmp_path(tmp_path)
            fatal(f"Refusing to extract entry {e.entry_name!r} from {image_archive}", e)
        except (ExtractionError, tarfile.TarError, OSError) as e:
            _remove_tmp_path(tmp_path)
            fatal(f"Could not extract {image_archive}", e)

        notice(f"Extracted {count} entries of {image} into {tmp_path}")
        try:
            result = run_gate(processor, report, image, format, output, report_all)
        finally:
            if keep_layers:
                notice(f"Extracted image kept in {tmp_path}")
            else:
                _remove_tmp_path(tmp_path)

    sys.exit(1 if result.should_fail else 0)
