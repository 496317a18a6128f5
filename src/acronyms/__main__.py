from __future__ import annotations
import argparse, json, logging, os, sys
from acronyms.engine import AcronymService
from acronyms.errors import DictionaryNotLoaded, LoadError
from acronyms.models import FetchProgress, LookupResult

def _print_progress(p: FetchProgress) -> None:
    if p.indeterminate:
        sys.stderr.write(f"\r[download] {p.bytes_done:,} bytes")
    else:
        sys.stderr.write(f"\r[download] {p.percent:3d}% ({p.bytes_done:,}/{p.total:,} bytes)")
    sys.stderr.flush()

def _as_json(r: LookupResult) -> dict:
    return {"query": r.query, "acronym": r.acronym, "found": r.found,
            "definitions": list(r.definitions)}

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Look up acronyms in a cached dictionary")
    p.add_argument("acronym", nargs="*", help="Acronyms to look up")
    p.add_argument("--db", default=None, help="Path of the local dictionary file")
    p.add_argument("--url", default=None, help="Where to download the dictionary from")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--refresh", action="store_true", help="Download the dictionary now")
    g.add_argument("--no-fetch", action="store_true", help="Never download, even if the file is missing")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--stats", action="store_true", help="Show how many acronyms are known")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    svc = AcronymService(path=args.db, url=args.url)
    rc = 0
    try:
        try:
            if args.refresh:
                task = svc.refresh(on_progress=_print_progress)
            else:
                task = svc.bootstrap(fetch_if_missing=not args.no_fetch, on_progress=_print_progress)
        except LoadError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

        if task is not None:
            try:
                outcome = task.wait()
            except KeyboardInterrupt:
                task.cancel()
                outcome = task.wait()
            sys.stderr.write("\n")
            print(outcome.message, file=sys.stderr)
            if not outcome.ok:
                rc = 1
                # keep answering from the previous copy, if any
                if not svc.loaded and os.path.exists(svc.path):
                    try:
                        svc.reload()
                    except LoadError as exc:
                        print(f"error: {exc}", file=sys.stderr)
                        return 2

        if args.stats:
            st = svc.stats()
            if args.json:
                print(json.dumps(st, ensure_ascii=False, indent=2))
            else:
                print(f"knows about {st['acronyms']:,} acronyms "
                      f"({st['definitions']:,} definitions) in {st['path']}")

        def run_query(q: str) -> None:
            r = svc.lookup(q)
            if args.json:
                print(json.dumps(_as_json(r), ensure_ascii=False, indent=2))
                return
            if not r.found:
                print(f"{r.acronym or q}: (no match)")
                return
            for d in r.definitions:
                print(f"{r.acronym}: {d}")

        queries = list(args.acronym)
        if args.q:
            queries.append(args.q)
        if not (queries or args.repl):
            return rc

        try:
            for q in queries:
                run_query(q)

            if args.repl:
                print("Type an acronym (empty line to exit).")
                while True:
                    try:
                        q = input("> ").strip()
                    except (EOFError, KeyboardInterrupt):
                        break
                    if not q:
                        break
                    run_query(q)
        except DictionaryNotLoaded as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

        return rc
    finally:
        svc.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
