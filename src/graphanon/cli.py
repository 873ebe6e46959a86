"""Command-line driver: anonymize a graph read from a file or generated at random.

Usage:
    python -m graphanon alpha --alpha 0.10001 -f paper_example.adjList --format labelled_adjacency_list -o out.adjList
    python -m graphanon alpha --alpha 0.05 -n 100 --occupancy 0.01 -l 2 --seed 7
    python -m graphanon kdegree -k 5 -f football.edgeList --format edge_list --hide-new-vertices --stats

Prints the original occupancy, the final occupancy and their relative change.
"""

import argparse
import json
import logging
import sys

from graphanon.anonymization import run_attribute_anonymization, run_identity_anonymization
from graphanon.anonymization.method_alpha_proximity import DEFAULT_METHOD, METHODS
from graphanon.exceptions import GraphAnonError, UnreachableTargetError
from graphanon.generators import random_graph
from graphanon.io import FileFormat, read_gml, read_graph, write_graph
from graphanon.metrics import Evaluator, default_metrics
from graphanon.utils import check_random_state

logger = logging.getLogger(__name__)

GML_FORMAT = "gml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphanon",
        description="Protect a graph against attribute disclosure (alpha-proximity) or degree-based identity "
        "disclosure (k-degree anonymity) by inserting edges.",
        epilog="Floating point thresholds such as 0.1 are approximated, consider adding a small correction "
        "(e.g. 0.00001) to alpha.",
    )
    subparsers = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    source = common.add_argument_group("input graph")
    source.add_argument("-f", "--input", help="Path to the input graph. Random graph options are ignored if given.")
    source.add_argument(
        "--format",
        choices=[f.value for f in FileFormat] + [GML_FORMAT],
        default=None,
        help="Format of the input and output files.",
    )
    source.add_argument("-n", "--num-vertices", type=int, help="Number of vertices of a random graph.")
    source.add_argument("--occupancy", type=float, help="Fraction of possible edges present in a random graph.")
    common.add_argument("-o", "--output", help="Write the anonymized graph to this path.")
    common.add_argument("--seed", type=int, default=None, help="Seed for every random choice.")
    common.add_argument("--stats", action="store_true", help="Report graph statistics before and after.")
    common.add_argument("--verbose", action="store_true", help="Enable DEBUG-level logging.")

    alpha = subparsers.add_parser("alpha", parents=[common], help="Alpha-proximity (attribute disclosure).")
    alpha.add_argument("--alpha", type=float, required=True, help="The privacy threshold.")
    alpha.add_argument("-l", "--labels", type=int, help="Label alphabet size of a random graph.")
    alpha.add_argument("--method", choices=METHODS, default=DEFAULT_METHOD)

    kdegree = subparsers.add_parser("kdegree", parents=[common], help="k-degree anonymity (identity disclosure).")
    kdegree.add_argument("-k", type=int, required=True, help="The privacy threshold.")
    kdegree.add_argument(
        "--hide-new-vertices", action="store_true", help="Make the inserted dummy vertices k-degree anonymous too."
    )
    return parser


def _load_graph(args, parser, rng):
    labelled = args.mode == "alpha"

    if args.input is not None:
        if args.format == GML_FORMAT:
            return read_gml(args.input, label_attribute="label" if labelled else None)
        default_format = FileFormat.LABELLED_ADJACENCY_LIST if labelled else FileFormat.ADJACENCY_LIST
        return read_graph(args.input, args.format or default_format)

    if args.num_vertices is None or args.occupancy is None or (labelled and args.labels is None):
        required = "-n, --occupancy and -l" if labelled else "-n and --occupancy"
        parser.error(f"Provide an input file (-f) or all of {required} for a random graph.")

    return random_graph(args.num_vertices, args.occupancy, num_labels=args.labels if labelled else None, rng=rng)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rng = check_random_state(args.seed)
    try:
        graph = _load_graph(args, parser, rng)
        original = graph.copy()
        original_occupancy = graph.occupancy()

        if args.mode == "alpha":
            run_attribute_anonymization(graph, args.alpha, rng=rng, method=args.method)
        else:
            run_identity_anonymization(graph, args.k, hide_new_vertices=args.hide_new_vertices)
    except UnreachableTargetError:
        logger.exception("Anonymization finished without reaching its privacy target. This is a bug.")
        return 2
    except (GraphAnonError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    new_occupancy = graph.occupancy()
    if original_occupancy > 0:
        occupancy_change = (new_occupancy - original_occupancy) / original_occupancy
    else:
        occupancy_change = float("inf") if new_occupancy > 0 else 0.0
    print(f"{original_occupancy} {new_occupancy} {occupancy_change}")

    if args.stats:
        metrics = default_metrics(k=getattr(args, "k", None), labelled=graph.labels is not None)
        results = Evaluator(metrics, use_igraph=True).evaluate(original, graph)
        print(json.dumps(results, indent=2, default=str))

    if args.output is not None:
        output_format = args.format
        if output_format in (None, GML_FORMAT):
            output_format = FileFormat.LABELLED_ADJACENCY_LIST if graph.labels is not None else FileFormat.ADJACENCY_LIST
        write_graph(graph, args.output, output_format)

    return 0
