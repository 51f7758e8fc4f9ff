"""
CLI Module
==========

Command-line interface for the Dataflow Lineage Analysis System.

This module provides:
- Main CLI entry point
- Argument parsing
- Command handlers over a local JSON snapshot of dataflow records
"""

import argparse
import json
import sys
from typing import List, Optional

from dataflow_lineage import __version__
from dataflow_lineage.core.config import Config, get_config_from_env
from dataflow_lineage.core.errors import LineageError
from dataflow_lineage.orchestrator import LineageAnalysisSystem
from dataflow_lineage.utils.logging_config import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser with all commands and options.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="dataflow-lineage",
        description="Dataflow Lineage Analysis System - Build and query lineage graphs from dataflow records.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Statistics and health score
  dataflow-lineage stats dataflows.json

  # Dependencies of a dataset
  dataflow-lineage deps dataflows.json ds123

  # Focused Mermaid diagram
  dataflow-lineage diagram dataflows.json ds123 --max-depth 5

  # All paths between two nodes
  dataflow-lineage paths dataflows.json ds1 ds9
        """
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to a JSON configuration file'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Logging level (DEBUG, INFO, WARNING, ERROR)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ========== STATS COMMAND ==========
    stats_parser = subparsers.add_parser('stats', help='Lineage statistics and health score')
    stats_parser.add_argument('snapshot', type=str, help='Path to dataflow JSON snapshot')
    stats_parser.add_argument('--json', action='store_true', help='Print JSON instead of text')

    # ========== DEPS COMMAND ==========
    deps_parser = subparsers.add_parser('deps', help='Upstream/downstream dependencies of a dataset')
    deps_parser.add_argument('snapshot', type=str, help='Path to dataflow JSON snapshot')
    deps_parser.add_argument('dataset_id', type=str, help='Dataset id')
    deps_parser.add_argument('--json', action='store_true', help='Print JSON instead of text')

    # ========== DIAGRAM COMMAND ==========
    diagram_parser = subparsers.add_parser('diagram', help='Mermaid lineage diagram')
    diagram_parser.add_argument('snapshot', type=str, help='Path to dataflow JSON snapshot')
    diagram_parser.add_argument('entity_id', nargs='?', default=None,
                                help='Focus on a dataset or dataflow id (whole graph if omitted)')
    diagram_parser.add_argument('--max-depth', type=str, default=None,
                                help='Traversal depth, clamped to 1-10')

    # ========== PATHS COMMAND ==========
    paths_parser = subparsers.add_parser('paths', help='All paths between two nodes')
    paths_parser.add_argument('snapshot', type=str, help='Path to dataflow JSON snapshot')
    paths_parser.add_argument('source', type=str, help='Source node id')
    paths_parser.add_argument('target', type=str, help='Target node id')

    # ========== PLOT COMMAND ==========
    plot_parser = subparsers.add_parser('plot', help='Render the lineage to an image')
    plot_parser.add_argument('snapshot', type=str, help='Path to dataflow JSON snapshot')
    plot_parser.add_argument('output', type=str, help='Output image path (.png, .svg, ...)')
    plot_parser.add_argument('--entity', type=str, default=None,
                             help='Focus on a dataset or dataflow id')
    plot_parser.add_argument('--max-depth', type=str, default=None,
                             help='Traversal depth, clamped to 1-10')

    return parser


def build_config(args: argparse.Namespace) -> Config:
    """Configuration from file or environment, with CLI overrides."""
    config = Config.load(args.config) if args.config else get_config_from_env()
    if args.log_level:
        config.log_level = args.log_level.upper()
    # Command output goes to stdout; keep progress lines out of it
    config.verbose = False
    return config


def cmd_stats(system: LineageAnalysisSystem, args: argparse.Namespace) -> int:
    """Print statistics and health score."""
    result = system.analyze()
    stats = result['statistics']

    if args.json:
        print(json.dumps({
            'statistics': stats.to_dict(),
            'health_score': result['health_score'],
            'recommendations': result['recommendations'],
        }, indent=2))
        return 0

    print("=" * 50)
    print("LINEAGE STATISTICS")
    print("=" * 50)
    print(f"  Dataflows:            {stats.total_dataflows}")
    print(f"    active:             {stats.active_dataflows}")
    print(f"    failed:             {stats.failed_dataflows}")
    print(f"    running:            {stats.running_dataflows}")
    print(f"    unknown:            {stats.unknown_dataflows}")
    print(f"  Datasets:             {stats.total_datasets}")
    print(f"    orphaned:           {stats.orphaned_datasets}")
    print(f"  Avg inputs/dataflow:  {stats.avg_inputs_per_dataflow:.2f}")
    print(f"  Avg outputs/dataflow: {stats.avg_outputs_per_dataflow:.2f}")
    print()
    print(f"Health score: {result['health_score']}/100 ({result['health_label']})")
    for recommendation in result['recommendations']:
        print(f"  • {recommendation}")
    return 0


def cmd_deps(system: LineageAnalysisSystem, args: argparse.Namespace) -> int:
    """Print dependencies of a dataset."""
    dependencies = system.dataset_lineage(args.dataset_id)
    if dependencies is None:
        print(f"✗ Dataset {args.dataset_id} not found in lineage")
        return 1

    if args.json:
        print(json.dumps(dependencies.to_dict(), indent=2))
        return 0

    print(f"{dependencies.dataset_name} ({dependencies.dataset_id})")
    for label, side in (("Upstream", dependencies.upstream), ("Downstream", dependencies.downstream)):
        print(f"\n{label} dataflows ({len(side.dataflows)}):")
        for dataflow in side.dataflows:
            print(f"  • {dataflow.name} ({dataflow.id})")
        print(f"{label} datasets ({len(side.datasets)}):")
        for dataset in side.datasets:
            print(f"  • {dataset.name} ({dataset.id})")
    return 0


def cmd_diagram(system: LineageAnalysisSystem, args: argparse.Namespace) -> int:
    """Print a Mermaid diagram."""
    print(system.entity_diagram(args.entity_id, args.max_depth))
    return 0


def cmd_paths(system: LineageAnalysisSystem, args: argparse.Namespace) -> int:
    """Print every path between two nodes."""
    paths = system.trace(args.source, args.target)
    if not paths:
        print(f"No path from {args.source} to {args.target}")
        return 1

    for i, path in enumerate(paths, 1):
        print(f"{i}. ({path.distance} hops) " + " -> ".join(n.name for n in path.nodes))
    return 0


def cmd_plot(system: LineageAnalysisSystem, args: argparse.Namespace) -> int:
    """Render the lineage to an image file."""
    from dataflow_lineage.visualization.lineage_viz import LineageVisualizer

    visualizer = LineageVisualizer(config=system.config.visualization)
    node_ids = system.contributors(args.entity, args.max_depth) if args.entity else None
    if args.entity and not node_ids:
        print(f"✗ Entity {args.entity} not found in lineage")
        return 1

    fig = visualizer.visualize_lineage(system.graph, node_ids=node_ids, highlight_id=args.entity)
    visualizer.save(fig, args.output)
    print(f"✓ Lineage plot saved to {args.output}")
    return 0


COMMANDS = {
    'stats': cmd_stats,
    'deps': cmd_deps,
    'diagram': cmd_diagram,
    'paths': cmd_paths,
    'plot': cmd_plot,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = build_config(args)
        setup_logging(config.log_level)

        system = LineageAnalysisSystem(config=config)
        system.load_file(args.snapshot)
        return COMMANDS[args.command](system, args)

    except KeyboardInterrupt:
        print("\n\n⚠ Operation cancelled by user")
        return 130
    except (LineageError, OSError, json.JSONDecodeError) as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
