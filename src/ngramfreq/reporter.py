"""Run header and summary printed in verbose mode."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from ngramfreq.alphabet.language import Language
from ngramfreq.config import RunConfig
from ngramfreq.traversal.processor import sum_file_sizes
from ngramfreq.utilities.display import (
    LINE_WIDTH,
    format_banner,
    format_bytes,
    format_field,
    shorten_path,
)

__all__ = ["print_run_header", "print_final_summary"]


def print_run_header(config: RunConfig, start_time: datetime) -> None:
    """Print the run configuration before processing starts."""
    print(format_banner("N-GRAM FREQUENCY RUN", style="━"))
    print(f"Start Time: {start_time:%Y-%m-%d %H:%M:%S}")
    print()
    print(format_banner("Configuration"))
    if config.discover:
        print(format_field("Mode", "discover alphabet"))
    else:
        language: Language = config.language
        print(format_field("Mode", f"{config.mode.value} {config.token_size}-grams"))
        print(format_field("Language", f"{language.code} - {language.name}"))
        print(format_field("Update existing", config.update))
    print(format_field("Inputs", len(config.inputs)))
    for path in config.inputs:
        print(f"  {shorten_path(path, LINE_WIDTH - 2)}")
    print(format_field("Output", config.resolved_out_path()))
    print()


def print_final_summary(
        start_time: datetime,
        end_time: datetime,
        config: RunConfig,
        distinct: int,
        total: Optional[int] = None,
) -> None:
    """
    Print final run statistics.

    Args:
        start_time: Run start timestamp
        end_time: Run end timestamp
        config: Configuration the run used
        distinct: Distinct tokens (or discovered characters)
        total: Total token occurrences, if counting n-grams
    """
    runtime = end_time - start_time
    input_bytes = sum_file_sizes(config.inputs)

    print()
    print(format_banner("Final Summary"))
    if config.discover:
        print(format_field("Characters discovered", f"{distinct:,}"))
    else:
        print(format_field("Distinct tokens", f"{distinct:,}"))
        if total is not None:
            print(format_field("Total occurrences", f"{total:,}"))
    print(format_field("Input size on disk", format_bytes(input_bytes)))
    print(format_field("Written to", config.resolved_out_path()))
    print()
    print(f"End Time: {end_time:%Y-%m-%d %H:%M:%S}")
    print(f"Total Runtime: {runtime}")
