from __future__ import annotations
import argparse, json, sys
from speller import Engine
from speller import config as CFG

def _print_rows(rows, *, as_json: bool, details: bool) -> None:
    if as_json:
        print(json.dumps([{"term": r.term, "distance": r.distance, "count": r.count} for r in rows],
                         ensure_ascii=False, indent=2))
        return
    if not rows:
        print("(no suggestions)"); return
    if details:
        print("#  Dist  Count      Term")
        for i, r in enumerate(rows, 1):
            print(f"{i:<2} {r.distance:<5} {r.count:<10} {r.term}")
        return
    for r in rows:
        print(f"Suggestion: {r.term}")

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Symmetric-delete spelling corrector")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--build", action="store_true", help="Build the dictionary from --roots")
    g.add_argument("--load", action="store_true", help="Load a saved dictionary from --db")

    p.add_argument("--roots", nargs="+", default=[], help="Corpus files, or folders to scan for .txt")
    p.add_argument("--db", default=None,
                   help="Dictionary store DSN: sqlite:///path, pickle:///path or memory://")
    p.add_argument("-d", "--max-edit-distance", type=int, default=CFG.MAX_EDIT_DISTANCE)
    p.add_argument("--verbosity", default=CFG.VERBOSITY,
                   choices=["top", "all_min_distance", "all_within_max"])
    p.add_argument("--language", default=CFG.LANGUAGE_TAG, help="Vocabulary tag (key prefix)")
    p.add_argument("--q", default=None, help="Single term to look up once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--details", action="store_true", help="Show distance and count")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if args.max_edit_distance < 0:
        p.error("--max-edit-distance must be >= 0")

    eng = Engine(max_edit_distance=args.max_edit_distance,
                 verbosity=args.verbosity, language=args.language)
    try:
        if args.build:
            if not args.roots:
                p.error("--build requires --roots")
            print("Creating dictionary ...")
            report = eng.build(roots=args.roots, db_dsn=args.db, verbose=args.verbose)
            for path in report.missing:
                print(f"File not found: {path}")
            print(f"Dictionary created: {eng.stats()['words']:,} words")
        else:
            if not args.db:
                p.error("--load requires --db")
            try:
                eng.load(args.db, verbose=args.verbose)
            except (FileNotFoundError, ValueError) as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 1

        def run_query(q: str):
            rows = eng.lookup(q)
            _print_rows(rows, as_json=args.json, details=args.details)

        if args.q:
            run_query(args.q)

        if args.repl:
            print("Type a word (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
