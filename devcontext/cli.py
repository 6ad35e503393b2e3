#!/usr/bin/env python3
"""Command-line entry point for the context pipeline."""

import argparse
import logging
import os
import sys
from pathlib import Path

from .comment_tree import CommentTreeBuilder
from .config import load_config
from .pipeline import ContextPipeline
from .provider import DevToClient
from .reporting import plot_tag_distribution, results_to_frame, save_csv


def setup_logging(log_level: str = 'INFO'):
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description='Build structured context for Dev.to articles, authors and discussions'
    )
    parser.add_argument(
        '--article',
        action='append',
        default=[],
        metavar='URL',
        help='Article URL to analyze (repeatable)'
    )
    parser.add_argument(
        '--user',
        action='append',
        default=[],
        metavar='USERNAME',
        help='Username to profile (repeatable)'
    )
    parser.add_argument(
        '--discussion',
        action='append',
        default=[],
        metavar='URL',
        help='Article URL whose comments to analyze (repeatable)'
    )
    parser.add_argument(
        '--config',
        default='config/pipeline_config.yaml',
        help='Path to configuration file'
    )
    parser.add_argument(
        '--output',
        default='output/context_results.json',
        help='Output JSON file path'
    )
    parser.add_argument(
        '--csv',
        default=None,
        help='Also write article results as CSV to this path'
    )
    parser.add_argument(
        '--plot-dir',
        default=None,
        help='Write a tag distribution chart per profiled user to this directory'
    )
    parser.add_argument(
        '--api-key',
        default=None,
        help='Dev.to API key (defaults to $DEVTO_API_KEY)'
    )
    return parser


def main(argv=None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)

    if not (args.article or args.user or args.discussion):
        print("Nothing to analyze: pass --article, --user or --discussion", file=sys.stderr)
        return 2

    api_key = args.api_key or os.environ.get('DEVTO_API_KEY')
    if not api_key:
        print("No API key: pass --api-key or set DEVTO_API_KEY", file=sys.stderr)
        return 1

    config = load_config(args.config)
    setup_logging(config.get('output', {}).get('log_level', 'INFO'))
    logger = logging.getLogger(__name__)

    tree_builder = CommentTreeBuilder(
        config.get('comment_tree', {}).get('duplicate_policy', 'last_wins')
    )
    provider = DevToClient.from_config(api_key, config.get('provider'), tree_builder=tree_builder)
    pipeline = ContextPipeline(provider, config=config)

    logger.info("Running context pipeline...")
    batch = pipeline.analyze_articles(args.article)
    results = {
        'metadata': batch['metadata'],
        'articles': batch['articles'],
        'users': {name: pipeline.analyze_user(name) for name in args.user},
        'discussions': {url: pipeline.analyze_discussion(url) for url in args.discussion},
    }

    payloads = [
        payload
        for group in ('articles', 'users', 'discussions')
        for payload in results[group].values()
    ]
    failures = [p['message'] for p in payloads if p['type'] == 'error']

    # Display summary
    print("\n" + "=" * 50)
    print("CONTEXT RESULTS")
    print("=" * 50)
    for url, payload in results['articles'].items():
        if payload['type'] == 'success':
            data = payload['data']
            print(f"{data['article']['title']}: {data['technical']['depth']} "
                  f"{data['content']['type']}, discussion {data['discussion']['quality']}")
    for name, payload in results['users'].items():
        if payload['type'] == 'success':
            print(f"{name}: {', '.join(payload['data']['expertise']) or 'no tags'}")
    for message in failures:
        print(f"  error: {message}")

    Path(args.output).parent.mkdir(parents=True, exist_ok=True)
    pipeline.save_results(results, args.output)

    if args.csv:
        Path(args.csv).parent.mkdir(parents=True, exist_ok=True)
        save_csv(results_to_frame(results['articles'].values()), args.csv)

    if args.plot_dir:
        Path(args.plot_dir).mkdir(parents=True, exist_ok=True)
        for name, payload in results['users'].items():
            if payload['type'] == 'success':
                plot_tag_distribution(
                    payload['data']['contributions']['topTags'],
                    os.path.join(args.plot_dir, f'{name}_tags.png'),
                    title=f'Tags used by {name}'
                )

    print("=" * 50 + "\n")
    return 1 if payloads and len(failures) == len(payloads) else 0


if __name__ == '__main__':
    sys.exit(main())
