"""
Generate booster packs from a Scryfall card dump.

Reads a bulk data file (or saved search response), deals packs and writes
them as CSV.

    python -m packforge.jobs.generate_packs default-cards.json --mode by_set
"""

import argparse
import logging
import sys
from pathlib import Path

from packforge.config import settings
from packforge.models.pack import FilterConfig, GenerationSettings, PartitionMode, RarityMode
from packforge.parsers.scryfall import load_card_records
from packforge.services.card_pool import process_cards
from packforge.services.csv_export import generate_csv
from packforge.services.pack_generator import generate_booster_box, generate_packs
from packforge.services.sampling import make_rng

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line options for the job."""
    parser = argparse.ArgumentParser(description="Generate booster packs from Scryfall card data")
    parser.add_argument(
        "cards",
        type=Path,
        help="Scryfall JSON file with card objects",
    )
    parser.add_argument(
        "--mode",
        default=PartitionMode.MIXED.value,
        choices=[mode.value for mode in PartitionMode],
        help="Draw from one mixed pool or set by set (default: mixed)",
    )
    parser.add_argument(
        "--rarity-mode",
        default=RarityMode.STANDARD.value,
        choices=[mode.value for mode in RarityMode],
        help="Pack composition (default: standard)",
    )
    parser.add_argument(
        "--packs",
        type=int,
        help="Sample exactly this many packs instead of exhausting the pool",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible packs")
    parser.add_argument("--exclude-basic-lands", action="store_true")
    parser.add_argument("--exclude-commander-sets", action="store_true")
    parser.add_argument("--exclude-tokens", action="store_true")
    parser.add_argument(
        "--output",
        type=Path,
        help="CSV file to write (default: stdout)",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    """
    Generate packs for parsed arguments.

    Returns:
        Number of packs written
    """
    records = load_card_records(args.cards)
    filters = FilterConfig(
        exclude_basic_lands=args.exclude_basic_lands,
        exclude_commander_sets=args.exclude_commander_sets,
        exclude_tokens=args.exclude_tokens,
    )
    generation = GenerationSettings(
        mode=PartitionMode(args.mode),
        rarity_mode=RarityMode(args.rarity_mode),
    )
    seed = args.seed if args.seed is not None else settings.default_seed
    rng = make_rng(seed)

    processed = process_cards(records, filters)
    if args.packs is not None:
        packs = generate_booster_box(processed.pools, args.packs, generation, rng)
    else:
        packs = generate_packs(processed.pools, processed.sets, generation, rng)

    if not packs:
        logger.warning("Not enough cards for this configuration")

    csv_text = generate_csv(packs)
    if args.output is not None:
        args.output.write_text(csv_text, encoding="utf-8")
        logger.info("Wrote %d packs to %s", len(packs), args.output)
    else:
        sys.stdout.write(csv_text)

    return len(packs)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        run(args)
    except (OSError, ValueError) as e:
        logger.error("Failed to generate packs: %s", e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
