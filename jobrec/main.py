#!/usr/bin/env python3
"""
Job Recommendation Engine
Command-line entry point for recommendations, training and evaluation

Usage:
    jobrec --mode recommend --user_id 7
    jobrec --mode collaborative --user_id 7
    jobrec --mode hybrid --user_id 7
    jobrec --mode similar --job_id 12
    jobrec --mode evaluate --strategy content
"""

import argparse
import json
from pathlib import Path

from .config import Config, load_config
from .data_processor import load_dataset
from .evaluate import METRIC_NAMES, evaluate_users
from .service import RecommendationService
from .text import text_similarity


def _load(args):
    config = load_config(args.config) if args.config else Config()
    if args.jobs:
        config.data.jobs_path = args.jobs
    if args.interactions:
        config.data.interactions_path = args.interactions
    if args.progress:
        config.training.show_progress = True

    print("Loading data...")
    jobs, interactions = load_dataset(config.data, config.weights)
    print(f"   Jobs: {len(jobs):,}")
    print(f"   Interactions: {len(interactions):,}")
    print(f"   Users: {len(interactions.user_ids()):,}")

    return RecommendationService(jobs, interactions, config)


def _print_results(title, results, output=None):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)

    if not results:
        print("   No recommendations available")
    for i, rec in enumerate(results, 1):
        print(f"   {i}. {rec.title[:50]} @ {rec.company[:25]} (score: {rec.score:.4f})")

    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w', encoding='utf-8') as f:
            json.dump([r.to_dict() for r in results], f, ensure_ascii=False, indent=2)
        print(f"\nSaved: {output}")


def recommend(args):
    """Content-based recommendations (hybrid fallback)"""
    service = _load(args)
    try:
        if args.fallback:
            service.train_model()
            results = service.recommend(args.user_id)
        else:
            results = service.content_based(args.user_id)
        _print_results(f"CONTENT-BASED RECOMMENDATIONS (user {args.user_id})", results[:args.top_k], args.output)
    finally:
        service.close()


def collaborative(args):
    """User-user collaborative recommendations"""
    service = _load(args)
    try:
        results = service.collaborative(args.user_id)
        _print_results(f"COLLABORATIVE RECOMMENDATIONS (user {args.user_id})", results[:args.top_k], args.output)
    finally:
        service.close()


def hybrid(args):
    """Train the hybrid snapshot and predict for one user"""
    service = _load(args)
    try:
        print("\nTraining hybrid model...")
        snapshot = service.train_model()
        print(f"   Users: {snapshot.num_users:,}")
        print(f"   Jobs: {snapshot.num_jobs:,}")
        print(f"   Interactions: {snapshot.num_interactions:,}")

        results = service.hybrid(args.user_id, top_n=args.top_k)
        _print_results(f"HYBRID RECOMMENDATIONS (user {args.user_id})", results, args.output)
    finally:
        service.close()


def similar(args):
    """Jobs whose title and description read most like a given job"""
    service = _load(args)
    try:
        target = service.jobs.get(args.job_id)
        if target is None:
            print(f"Job not found: {args.job_id}")
            return

        target_text = f"{target.title} {target.description}"
        scored = [
            (job, text_similarity(target_text, f"{job.title} {job.description}"))
            for job in service.jobs.all()
            if job.id != target.id
        ]
        scored.sort(key=lambda x: x[1], reverse=True)

        print(f"\nJobs similar to {target.id}: {target.title}")
        for i, (job, sim) in enumerate(scored[:args.top_k], 1):
            print(f"   {i}. {job.title[:50]} @ {job.company[:25]} (similarity: {sim:.4f})")
    finally:
        service.close()


def evaluate(args):
    """Average quality metrics over all users"""
    service = _load(args)
    try:
        if args.strategy == 'hybrid':
            service.train_model()
            recommend_fn = service.hybrid
        elif args.strategy == 'collaborative':
            recommend_fn = service.collaborative
        else:
            recommend_fn = service.content_based

        def recommended_jobs(user_id):
            results = recommend_fn(user_id)[:args.top_k]
            return [service.jobs.get(r.job_id) for r in results if service.jobs.get(r.job_id)]

        print(f"\nEvaluating {args.strategy} recommendations...")
        metrics = evaluate_users(
            recommended_jobs,
            service.interactions.by_user(),
            service.config.eval,
            show_progress=service.config.training.show_progress,
        )

        print("\n" + "=" * 40)
        print("EVALUATION RESULTS")
        print("=" * 40)
        print(f"   Users: {int(metrics['Users']):,}")
        for name in METRIC_NAMES:
            print(f"   {name}: {metrics[name]:.4f}")

        if args.output:
            Path(args.output).parent.mkdir(parents=True, exist_ok=True)
            with open(args.output, 'w') as f:
                json.dump(metrics, f, indent=2)
            print(f"\nResults saved to {args.output}")
    finally:
        service.close()


def build_parser():
    parser = argparse.ArgumentParser(description='Job Recommendation Engine')

    parser.add_argument('--mode', type=str, default='recommend',
                        choices=['recommend', 'collaborative', 'hybrid', 'similar', 'evaluate'],
                        help='What to run')
    parser.add_argument('--config', type=str, default=None, help='YAML config overrides')
    parser.add_argument('--jobs', type=str, default=None, help='Jobs JSONL/CSV file')
    parser.add_argument('--interactions', type=str, default=None, help='Interactions JSONL/CSV file')
    parser.add_argument('--user_id', type=int, default=None, help='Target user')
    parser.add_argument('--job_id', type=int, default=None, help='Target job for --mode similar')
    parser.add_argument('--top_k', type=int, default=10, help='Number of recommendations')
    parser.add_argument('--strategy', type=str, default='content',
                        choices=['content', 'collaborative', 'hybrid'],
                        help='Strategy scored by --mode evaluate')
    parser.add_argument('--fallback', action='store_true',
                        help='Fall back to the hybrid model when content-based finds nothing')
    parser.add_argument('--progress', action='store_true', help='Show progress bars')
    parser.add_argument('--output', type=str, default=None, help='Write results as JSON')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.mode in ('recommend', 'collaborative', 'hybrid') and args.user_id is None:
        parser.error(f"--user_id is required for --mode {args.mode}")
    if args.mode == 'similar' and args.job_id is None:
        parser.error("--job_id is required for --mode similar")

    modes = {
        'recommend': recommend,
        'collaborative': collaborative,
        'hybrid': hybrid,
        'similar': similar,
        'evaluate': evaluate,
    }
    modes[args.mode](args)


if __name__ == "__main__":
    main()
