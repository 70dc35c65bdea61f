#!/usr/bin/env python3
"""
ngrams command line tool.

Counts letter or word n-grams over text files and zip archives and writes a
frequency table as CSV, or discovers the alphabet used by the input.

Examples:
  ngrams -a en -s 2 -o en-bigrams.csv book1.txt books.zip
  ngrams --words -s 2 --update -o word-bigrams.csv more.txt
  ngrams --discover -o languages.csv unknown.txt
  ngrams --available --languages my-languages.csv

Formats:
  Frequency table (--out):
    #token,count,percentage
    the,142,0.09452200

  Languages file (--languages, and --discover output):
    #code,name,letters
    af,Afrikaans,abcdefghijklmnopqrstuvwxyzáêéèëïíîôóúû
"""
from __future__ import annotations

import argparse
import logging
import signal
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

from ngramfreq import __version__
from ngramfreq.alphabet.builtin import builtin_languages
from ngramfreq.alphabet.discover import DiscoverProcessor
from ngramfreq.alphabet.language import LanguageMap
from ngramfreq.alphabet.load import load_languages_from_file
from ngramfreq.cancel import CancelToken
from ngramfreq.config import DEFAULT_LANGUAGE, RunConfig
from ngramfreq.errors import NgramFreqError, OperationCancelled
from ngramfreq.logger import LOG_DATEFMT, LOG_FORMAT, setup_logger
from ngramfreq.ngrams.processor import FrequencyProcessor
from ngramfreq.reporter import print_final_summary, print_run_header
from ngramfreq.traversal.progress import (
    LoggingProgressReporter,
    ProgressReporter,
    TqdmProgressReporter,
)

logger = logging.getLogger(__name__)

__all__ = ["build_parser", "main", "run"]

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ngrams",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("inputs", nargs="*", metavar="file",
                   help="Input files to read; .zip archives are also supported.")
    p.add_argument("-o", "--out", dest="out_path", type=Path,
                   help="Output path (default: ./<lang>-<letters|words>-<size>.csv, "
                        "or ./languages.csv with --discover).")
    p.add_argument("-s", "--size", dest="token_size", type=int, default=1,
                   help="Number of letters or words per n-gram (default: 1).")
    p.add_argument("-a", "--lang", dest="lang_code", default=DEFAULT_LANGUAGE,
                   help="Alphabet language code, e.g. en = English (default: en).")
    p.add_argument("--languages", dest="languages_file", type=Path,
                   help="Path to a languages CSV (#code,name,letters).")

    unit = p.add_mutually_exclusive_group()
    unit.add_argument("-l", "--letters", dest="words", action="store_false",
                      help="Letter n-grams, e.g. bigrams st, er, ie (default).")
    unit.add_argument("-w", "--words", dest="words", action="store_true",
                      help='Word n-grams, e.g. bigrams "he jumped", "she walked".')
    p.set_defaults(words=False)

    p.add_argument("-d", "--discover", action="store_true",
                   help="Write the non-whitespace characters used as a languages file.")
    p.add_argument("-u", "--update", action="store_true",
                   help="Add to the counts already in the output file.")
    p.add_argument("--available", action="store_true",
                   help="List the available languages and exit.")
    p.add_argument("--progress", action="store_true",
                   help="Show a progress bar.")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Print the run configuration and summary.")
    p.add_argument("--log-dir", type=Path,
                   help="Also write a timestamped log file to this directory.")
    p.add_argument("--version", action="version", version=f"ngrams v{__version__}")
    return p


def print_available_languages(languages: LanguageMap, out: Optional[TextIO] = None) -> None:
    """Print "code : name" per language, sorted by code."""
    for code in languages.codes():
        print(f"{code} : {languages[code].name}", file=out)


@contextmanager
def _cancel_on_sigint(cancel: CancelToken) -> Iterator[None]:
    """Turn Ctrl-C into a cooperative cancel for the duration of the block."""
    def _handler(signum, frame):
        cancel.cancel("interrupted")

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _configure_logging(config: RunConfig) -> None:
    level = logging.INFO if config.verbose else logging.WARNING
    if config.log_dir is not None:
        setup_logger(config.log_dir, level=logging.INFO, console=config.verbose, force=True)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def _make_reporter(config: RunConfig) -> Optional[ProgressReporter]:
    if config.progress:
        return TqdmProgressReporter()
    if config.verbose:
        return LoggingProgressReporter()
    return None


def run(config: RunConfig, cancel: Optional[CancelToken] = None) -> None:
    """Execute one configured run (count n-grams or discover an alphabet)."""
    start_time = datetime.now()
    out_path = config.resolved_out_path()
    reporter = _make_reporter(config)

    if config.verbose:
        print_run_header(config, start_time)

    try:
        if config.discover:
            discoverer = DiscoverProcessor(progress=reporter)
            discoverer.process_files(config.inputs, cancel)
            discoverer.save(out_path)
            distinct, total = len(discoverer.letters()), None
        else:
            language = config.language
            logger.info("Language: %s - %s", language.code, language.name)
            processor = FrequencyProcessor(config.mode, language, config.token_size, progress=reporter)

            if config.update and out_path.exists():
                logger.info("Loading existing frequency table: %s", out_path)
                processor.load_frequencies_from_file(out_path)

            processor.process_files(config.inputs, cancel)
            processor.save(out_path)
            table = processor.frequency_table
            distinct, total = len(table), table.total()
    finally:
        if isinstance(reporter, TqdmProgressReporter):
            reporter.close()

    if config.verbose:
        print_final_summary(start_time, datetime.now(), config, distinct, total)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.available:
            languages = (
                load_languages_from_file(args.languages_file)
                if args.languages_file else builtin_languages()
            )
            print_available_languages(languages)
            return EXIT_OK

        config = RunConfig.build(
            args.inputs,
            languages_file=args.languages_file,
            out_path=args.out_path,
            token_size=args.token_size,
            words=args.words,
            lang_code=args.lang_code,
            discover=args.discover,
            update=args.update,
            verbose=args.verbose,
            progress=args.progress,
            log_dir=args.log_dir,
        )
        _configure_logging(config)

        cancel = CancelToken()
        with _cancel_on_sigint(cancel):
            run(config, cancel)

    except OperationCancelled as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_CANCELLED
    except (NgramFreqError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
