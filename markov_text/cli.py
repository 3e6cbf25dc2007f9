#!/usr/bin/env python3
"""
Generate sentences from a text corpus with a Markov chain.

Usage:
    markov-text data/corpus.txt -n 5 --max-words 20
    markov-text data/corpus.txt --start "The cat" --seed 42
"""

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional

from markov_text.config import settings
from markov_text.services.text import EmptyCorpusError, Text, TextOptions
from markov_text.utils.logger import setup_logger

logger = setup_logger("markov_text")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate sentences with a Markov chain")
    parser.add_argument("corpus", type=Path, help="Corpus file, one sentence per line")
    parser.add_argument("--count", "-n", type=int, default=1, help="Number of sentences")
    parser.add_argument("--tries", type=int, default=settings.MARKOV_TRIES)
    parser.add_argument("--min-words", type=int, default=settings.MARKOV_MIN_WORDS)
    parser.add_argument("--max-words", type=int, default=settings.MARKOV_MAX_WORDS)
    parser.add_argument("--state-size", type=positive_int, default=settings.MARKOV_STATE_SIZE)
    parser.add_argument("--start", default="", help="Start words for every sentence")
    parser.add_argument("--loose", action="store_true",
                        help="Allow start words anywhere in the sentence")
    parser.add_argument("--seed", type=int, default=settings.MARKOV_SEED, help="Random seed")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        raw = args.corpus.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"[ERR] Cannot read corpus: {e}")
        return 1

    try:
        model = Text(
            raw,
            state_size=args.state_size,
            rng=random.Random(args.seed),
            max_overlap_ratio=settings.MARKOV_MAX_OVERLAP_RATIO,
            max_overlap_total=settings.MARKOV_MAX_OVERLAP_TOTAL,
        )
    except EmptyCorpusError as e:
        logger.error(f"[ERR] {args.corpus}: {e}")
        return 1

    options = TextOptions(tries=args.tries, min_words=args.min_words, max_words=args.max_words)
    for _ in range(args.count):
        if args.start:
            try:
                sentence = model.generate_with_start(args.start, options, strict=not args.loose)
            except ValueError as e:
                logger.error(f"[ERR] {e}")
                return 2
        else:
            sentence = model.generate(options)
        print(sentence)

    return 0


if __name__ == "__main__":
    sys.exit(main())
