"""Vulnerability gate command"""

import asyncio
import sys
from typing import Optional

import click

from ...config.settings import ScannerConfig
from ...config.whitelist import load_whitelist
from ...core.exceptions import ConfigurationError, ReportError, UnknownSeverityError
from ...core.models import GateResult, Whitelist
from ...processing.processor import ScanProcessor
from ..console import fatal, info, notice
from ..formatters.csv import CSVFormatter
from ..formatters.json import JSONFormatter
from ..formatters.table import TableFormatter


def build_processor(config: ScannerConfig) -> ScanProcessor:
    """Validate policy settings, exiting on any configuration error"""
    try:
        whitelist = load_whitelist(config.whitelist_file) if config.whitelist_file else Whitelist.empty()
        return ScanProcessor(config, whitelist)
    except ConfigurationError as e:
        fatal("Invalid configuration", e)


def render(result: GateResult, format: str, report_all: bool, color: bool = True) -> str:
    if format == 'json':
        return JSONFormatter.format_result(result, report_all)
    if format == 'csv':
        return CSVFormatter.format_result(result, report_all)
    return TableFormatter.format_result(result, report_all, color)


def run_gate(processor: ScanProcessor, report: str, image: str, format: str,
             output: Optional[str], report_all: bool) -> GateResult:
    """Load a report, gate it and write the results"""
    async def process():
        async with processor:
            return await processor.process(report, image)

    try:
        result = asyncio.run(process())
    except ReportError as e:
        fatal("Could not load vulnerability report", e)
    except UnknownSeverityError as e:
        fatal("Invalid vulnerability report", e)

    output_text = render(result, format, report_all, color=output is None)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(output_text)
        notice(f"Results saved to {output}")
    else:
        click.echo(output_text)

    if result.should_fail:
        click.echo(f"Image [{image}] contains {len(result.unapproved)} unapproved vulnerabilities", err=True)
    else:
        info(f"Image [{image}] contains NO unapproved vulnerabilities")
    return result


def apply_policy_options(config: ScannerConfig, threshold: Optional[str], whitelist: Optional[str]):
    if threshold:
        config.threshold = threshold
    if whitelist:
        config.whitelist_file = whitelist


@click.command()
@click.argument('report')
@click.option('--image', '-i', required=True, help='Name of the scanned image, used for image-scoped whitelist entries')
@click.option('--threshold', '-t', help='Minimum severity that fails the scan (Critical, High, Medium, Low, Negligible, Unknown)')
@click.option('--whitelist', '-w', type=click.Path(), help='Path to the whitelist YAML file')
@click.option('--format', type=click.Choice(['table', 'json', 'csv']), default='table', help='Output format')
@click.option('--output', '-o', help='Output file path')
@click.option('--report-all', is_flag=True, help='Report all vulnerabilities, not only unapproved ones')
@click.pass_context
def check(ctx, report, image, threshold, whitelist, format, output, report_all):
    """Gate a vulnerability report against the severity threshold and whitelist

    REPORT is a JSON report file or an http(s) URL of the analysis service.
    Exits with status 1 when unapproved vulnerabilities are found.

    Examples:
        scangate check report.json --image app:1
        scangate check report.json --image app:1 --threshold High
        scangate check report.json --image app:1 -w whitelist.yaml --format json
    """
    config = ctx.obj['config']
    apply_policy_options(config, threshold, whitelist)

    processor = build_processor(config)
    result = run_gate(processor, report, image, format, output, report_all)
    sys.exit(1 if result.should_fail else 0)
