"""Main entry point for the evolution simulation.

Runs the simulation headless for a number of days and reports how the
population evolved. Statistics can be exported as JSON for later analysis.
"""

import argparse
import logging
import sys
from pathlib import Path

from evolution.config.simulation_config import PRESETS, GameConfiguration
from evolution.events.events import MilestoneAchievedEvent
from evolution.logging_config import configure_logging
from evolution.simulation.engine import SimulationEngine
from evolution.state_payloads import dumps_statistics

SEPARATOR_WIDTH = 60

logger = logging.getLogger(__name__)


def run_headless(
    days: int,
    preset: str = "default",
    seed=None,
    time_scale: float = 1.0,
    export_stats=None,
) -> SimulationEngine:
    """Run the simulation without any visualization.

    Args:
        days: Number of days to simulate
        preset: Name of the configuration preset
        seed: Optional random seed for deterministic behavior
        time_scale: Simulated seconds per wall-clock second
        export_stats: Optional filename for the final statistics JSON
    """
    config = GameConfiguration.preset(preset)
    engine = SimulationEngine(config, seed=seed, time_scale=time_scale)
    engine.event_bus.subscribe(
        MilestoneAchievedEvent,
        lambda event: logger.info("Milestone: %s", event.milestone.description),
    )

    completed = engine.run_days(days)
    stats = engine.publish_statistics()

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("Completed %d day(s) (requested %d)", completed, days)
    logger.info("Population: %d, max generation: %d", stats.population, stats.max_generation)
    logger.info("Births: %d, deaths: %d", stats.total_births, stats.total_deaths)
    logger.info(
        "Deaths by cause: starvation=%d old_age=%d low_energy=%d hazard=%d",
        stats.deaths_by_cause.starvation,
        stats.deaths_by_cause.old_age,
        stats.deaths_by_cause.low_energy,
        stats.deaths_by_cause.hazard,
    )
    speed = stats.stats_for("speed")
    logger.info("Speed mean %.2f (min %.0f, max %.0f)", speed.mean, speed.min, speed.max)
    for species in stats.species:
        logger.info("Species %s: %d organisms", species.name, species.population)
    for insight in engine.correlations.insights():
        logger.info("Insight: %s", insight)
    logger.info("=" * SEPARATOR_WIDTH)

    if export_stats:
        Path(export_stats).write_bytes(dumps_statistics(stats))
        logger.info("Stats exported to: %s", export_stats)

    return engine


def main():
    """Parse command-line arguments and run the simulation."""
    parser = argparse.ArgumentParser(
        description="Evolutionary Foraging Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run 50 days with default settings
  python main.py

  # Reproducible run with a preset
  python main.py --days 200 --seed 42 --preset fast_evolution

  # Export final statistics
  python main.py --days 100 --export-stats results.json
        """,
    )

    parser.add_argument(
        "--days", type=int, default=50, help="Number of days to simulate (default: 50)"
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="default",
        help="Configuration preset (default: default)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--time-scale",
        type=float,
        default=1.0,
        help="Simulated seconds per frame second (default: 1.0)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: EVOLUTION_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--export-stats",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Export final statistics to a JSON file (e.g., results.json)",
    )

    args = parser.parse_args()
    configure_logging(level=args.log_level)

    if args.days <= 0 or args.time_scale <= 0:
        logger.error("--days and --time-scale must be positive")
        sys.exit(2)

    logger.info("Starting headless simulation: %d days, preset %s", args.days, args.preset)
    run_headless(
        args.days,
        preset=args.preset,
        seed=args.seed,
        time_scale=args.time_scale,
        export_stats=args.export_stats,
    )


if __name__ == "__main__":
    main()
