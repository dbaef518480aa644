"""
Entrypoint: fetch a document and print the div matching the target classes
"""

import sys
from pathlib import Path
from typing import Optional

import click
import structlog

from divextract import __version__, config
from divextract.config import ConfigError, Settings, resolve_settings
from divextract.fetcher import fetch_document
from divextract.logging_config import configure_logging
from divextract.text_extractor import extract_text
from divextract.web_extractor import extract_content

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def write_output(content: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(content, encoding="utf-8")
        logger.info("output_written", path=output, length=len(content))
    else:
        click.echo(content)


def run(
    settings: Settings,
    output: Optional[str] = None,
    as_text: bool = False,
    fallback_raw: bool = False,
) -> int:
    """Fetch, extract and write; returns the process exit code."""
    logger.info("starting_extraction",
               url=settings.url,
               timeout_seconds=settings.timeout,
               target_classes=settings.target_classes)

    fetched = fetch_document(settings.url, settings.timeout, settings.user_agent)
    if not fetched.success:
        logger.error("fetch_failed",
                    url=settings.url,
                    status_code=fetched.status_code,
                    error=fetched.error)
        return EXIT_FAILURE

    extracted = extract_content(fetched.content, settings.target_classes)
    if extracted.success:
        content = extracted.content
    elif fallback_raw:
        logger.warning("falling_back_to_raw_markup",
                      error=extracted.error.value,
                      reason=extracted.reason)
        content = fetched.content
    else:
        logger.error("extraction_failed",
                    url=settings.url,
                    error=extracted.error.value,
                    reason=extracted.reason)
        return EXIT_FAILURE

    if as_text:
        content = extract_text(content)

    write_output(content, output)
    logger.info("extraction_succeeded",
               url=settings.url,
               length=len(content),
               match_count=extracted.match_count)
    return EXIT_OK


@click.command()
@click.option('--url', '-u', envvar='SOURCE_URL', help='Document URL (env: SOURCE_URL)')
@click.option('--timeout', '-t', envvar='FETCH_TIMEOUT', help='Request timeout in seconds (env: FETCH_TIMEOUT)')
@click.option('--classes', '-c', 'target_classes', envvar='TARGET_CLASSES',
              help='Whitespace separated class tokens of the div to extract (env: TARGET_CLASSES)')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the result to a file instead of stdout')
@click.option('--text', 'as_text', is_flag=True, help='Render the extracted element as plain text')
@click.option('--fallback-raw', is_flag=True, help='Emit the unprocessed document when extraction fails')
@click.option('--log-level', envvar='LOG_LEVEL', default=config.LOG_LEVEL, help='Logging level (env: LOG_LEVEL)')
@click.version_option(version=__version__)
def cli(url, timeout, target_classes, output, as_text, fallback_raw, log_level):
    """
    Fetch a document over HTTP and extract the first div whose class
    attribute contains every requested class token.
    """
    configure_logging(level=log_level, fmt=config.LOG_FORMAT)

    try:
        settings = resolve_settings(url=url, timeout=timeout, target_classes=target_classes)
        code = run(settings, output=output, as_text=as_text, fallback_raw=fallback_raw)
    except ConfigError as e:
        logger.error("invalid_configuration", error=str(e))
        code = EXIT_FAILURE
    except KeyboardInterrupt:
        logger.info("interrupted")
        code = EXIT_FAILURE
    except Exception as e:
        logger.error("fatal_error",
                    error=str(e),
                    exc_info=True)
        code = EXIT_FAILURE

    sys.exit(code)


def main():
    cli()


if __name__ == "__main__":
    main()
