"""
civicstore Command-Line Interface (CLI)

Small front end over the container library for route planning and
service-request triage. It ties together:
- WeightedGraph (BFS + Prim's minimum spanning tree)
- ServiceDesk (priority-queue triage)

Usage examples:
    python -m civicstore.cli mst --edges routes.csv --start DEPOT
    python -m civicstore.cli mst --edges routes.csv --start DEPOT --out mst.csv
    python -m civicstore.cli bfs --edges routes.csv --start DEPOT
    python -m civicstore.cli triage --requests requests.csv --limit 10

Edge files hold ``u,v,weight`` rows (a header row is optional). Request files
need a header with ``location,category,description,priority``.
"""

import argparse
import csv
import logging
import sys

from .catalog import ServiceDesk
from .datastructures import DataStructureError, WeightedGraph, total_weight

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Input loading
# -------------------------------------------------------------------
def _is_number(text):
    try:
        float(text)
    except ValueError:
        return False
    return True


def load_graph(path):
    """Build a WeightedGraph from a ``u,v,weight`` CSV file."""
    graph = WeightedGraph()
    first = True
    with open(path, newline="") as f:
        for lineno, row in enumerate(csv.reader(f), start=1):
            if not row or not "".join(row).strip():
                continue
            if len(row) < 3:
                raise ValueError(f"{path}:{lineno}: expected u,v,weight")
            u, v, w = (c.strip() for c in row[:3])
            if first:
                first = False
                if not _is_number(w):
                    continue  # header
            graph.add_edge(u, v, float(w))
    logger.info("Loaded %d nodes / %d edges from %s", graph.node_count, graph.edge_count, path)
    return graph


def load_requests(path):
    """Submit every row of a request CSV into a fresh ServiceDesk."""
    desk = ServiceDesk()
    with open(path, newline="") as f:
        for row in csv.DictReader(f):
            desk.submit(
                location=row.get("location", ""),
                category=(row.get("category") or "").strip().lower(),
                description=row.get("description", ""),
                priority=int(row.get("priority") or 5),
            )
    return desk


def _fmt_weight(w):
    return f"{w:g}"


# -------------------------------------------------------------------
# Command handlers
# -------------------------------------------------------------------
def cmd_mst(args):
    """Print (and optionally export) the minimum spanning tree from --start."""
    graph = load_graph(args.edges)
    if not graph.has_node(args.start):
        print(f"Unknown start node: {args.start}")
        return 1

    edges = graph.mst(args.start)
    print(f"Minimum spanning tree from {args.start}:")
    for e in edges:
        print(f"  {e.u} - {e.v} ({_fmt_weight(e.weight)})")
    print(f"Total weight: {_fmt_weight(total_weight(edges))}")
    if len(edges) < graph.node_count - 1:
        print(f"Note: only {len(edges) + 1} of {graph.node_count} nodes are reachable.")

    if args.out:
        with open(args.out, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["u", "v", "weight"])
            for e in edges:
                writer.writerow([e.u, e.v, _fmt_weight(e.weight)])
        print(f"Exported {len(edges)} edges to {args.out}")
    return 0


def cmd_bfs(args):
    """Print breadth-first visiting order from --start."""
    graph = load_graph(args.edges)
    order = graph.bfs(args.start)
    if not order:
        print(f"Unknown start node: {args.start}")
        return 1
    print(" -> ".join(str(n) for n in order))
    return 0


def cmd_triage(args):
    """Print requests in triage order (most urgent first)."""
    desk = load_requests(args.requests)
    queue = desk.triage_order()
    if not queue:
        print("No requests waiting.")
        return 0
    print("Triage order (most urgent first):")
    shown = queue if args.limit is None else queue[: args.limit]
    for rank, r in enumerate(shown, start=1):
        print(f"  {rank}. {r.reference_number} | p{r.priority} | {r.category} | {r.location} | {r.description}")
    return 0


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="civicstore", description="civicstore data-structure CLI")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- graphs ---
    s = sub.add_parser("mst", help="Minimum spanning tree (Prim)")
    s.add_argument("--edges", required=True)
    s.add_argument("--start", required=True)
    s.add_argument("--out")
    s.set_defaults(func=cmd_mst)

    s = sub.add_parser("bfs", help="Breadth-first traversal order")
    s.add_argument("--edges", required=True)
    s.add_argument("--start", required=True)
    s.set_defaults(func=cmd_bfs)

    # --- service requests ---
    s = sub.add_parser("triage", help="Show service requests by priority")
    s.add_argument("--requests", required=True)
    s.add_argument("--limit", type=int)
    s.set_defaults(func=cmd_triage)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m civicstore.cli`."""
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (DataStructureError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
