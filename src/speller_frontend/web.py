from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from speller.engine import Engine
from speller import config as CFG

app = Flask(__name__)
_engine: Engine | None = None

def _rows(items):
    return [{"term": s.term, "distance": s.distance, "count": s.count} for s in items]

# ---------- API ----------
@app.get("/api/lookup")
def api_lookup():
    q = request.args.get("q", "", type=str)
    verbosity = request.args.get("verbosity", None, type=str)
    d = request.args.get("d", None, type=int)
    if _engine is None:
        return jsonify({"error": "engine not initialized"}), 503
    if not q.strip():
        return jsonify([])
    try:
        rows = _engine.lookup(q, max_distance=d, verbosity=verbosity)  # type: ignore
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(_rows(rows))

@app.post("/api/words")
def api_add_words():
    if _engine is None:
        return jsonify({"error": "engine not initialized"}), 503
    data = request.get_json(silent=True) or {}
    words = data.get("words")
    if words is None:
        words = [data["word"]] if "word" in data else []
    if not isinstance(words, list) or not words:
        return jsonify({"error": "expected 'word' or a non-empty 'words' list"}), 400
    added = 0
    for w in words:
        if not isinstance(w, str) or not w.strip():
            return jsonify({"error": f"invalid word: {w!r}"}), 400
        if _engine.add_word(w):  # type: ignore
            added += 1
    return jsonify({"added": added, "words": _engine.stats()["words"]})  # type: ignore

@app.get("/health")
def health():
    stats = _engine.stats() if _engine is not None else {"words": 0, "entries": 0}
    return jsonify({"ok": _engine is not None, "words": stats["words"], "entries": stats["entries"]})

# ---------- UI ----------
@app.get("/")
def home():
    # one input, results fetched from /api/lookup; no external deps
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Spelling correction</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial; }
.container{ max-width:720px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 12px 0; }
form{ display:flex; gap:12px; }
input, select{ padding:10px 12px; border-radius:10px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); font-size:16px; }
input{ flex:1 } input:focus{ border-color:var(--accent); outline:none }
.row{ display:grid; grid-template-columns:2em 4em 6em 1fr; padding:6px 0; border-bottom:1px solid var(--border); }
.small{ color:var(--muted); font-size:13px }
</style>
</head>
<body>
<div class="container"><div class="card">
  <h1>Spelling correction</h1>
  <form id="f" autocomplete="off">
    <input id="q" placeholder="Type a word…" autofocus />
    <select id="v">
      <option value="top">top</option>
      <option value="all_min_distance">closest</option>
      <option value="all_within_max">all</option>
    </select>
  </form>
  <div id="out" class="small">Start typing to see suggestions.</div>
</div></div>
<script>
const q = document.getElementById("q"), v = document.getElementById("v"), out = document.getElementById("out");
let t;
async function lookup(){
  const term = q.value.trim();
  if(!term){ out.textContent = "Start typing to see suggestions."; return; }
  const r = await fetch(`/api/lookup?q=${encodeURIComponent(term)}&verbosity=${v.value}`);
  const data = await r.json();
  if(!r.ok){ out.textContent = data.error || `error ${r.status}`; return; }
  if(!Array.isArray(data) || !data.length){ out.textContent = "(no suggestions)"; return; }
  out.innerHTML = data.map((s,i)=>`<div class="row"><span class="small">${i+1}</span>`+
    `<span class="small">d=${s.distance}</span><span class="small">${s.count}</span><span></span></div>`).join("");
  out.querySelectorAll(".row span:last-child").forEach((el,i)=>{ el.textContent = data[i].term; });
}
q.addEventListener("input", ()=>{ clearTimeout(t); t = setTimeout(lookup, 150); });
v.addEventListener("change", lookup);
document.getElementById("f").addEventListener("submit", ev=>{ ev.preventDefault(); lookup(); });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Flask UI on top of Engine")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("--build", action="store_true")
    mode.add_argument("--load", action="store_true")
    ap.add_argument("--roots", nargs="+", default=[])
    ap.add_argument("--db", dest="db", default=None)  # DSN: "sqlite:///path", "pickle:///path" or "memory://"
    ap.add_argument("-d", "--max-edit-distance", type=int, default=CFG.MAX_EDIT_DISTANCE)
    ap.add_argument("--verbosity", default=CFG.VERBOSITY)
    ap.add_argument("--language", default=CFG.LANGUAGE_TAG)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine(max_edit_distance=args.max_edit_distance,
                     verbosity=args.verbosity, language=args.language)
    if args.build:
        if not args.roots:
            ap.error("--build requires --roots")
        _engine.build(roots=args.roots, db_dsn=args.db, verbose=args.verbose)
    else:
        if not args.db:
            ap.error("--load requires --db")
        _engine.load(args.db, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
