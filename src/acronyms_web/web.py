from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify, Response
from acronyms.engine import AcronymService
from acronyms.errors import DictionaryNotLoaded, LoadError

app = Flask(__name__)
log = logging.getLogger(__name__)
_service: AcronymService | None = None

# ---------- API ----------
@app.get("/api/lookup")
def api_lookup():
    q = request.args.get("q", "", type=str)
    if not q.strip():
        return jsonify({"error": "missing query parameter 'q'"}), 400
    try:
        r = _service.lookup(q)  # type: ignore
    except DictionaryNotLoaded as exc:
        return jsonify({"error": str(exc), "refresh": True}), 503
    return jsonify({
        "query": r.query,
        "acronym": r.acronym,
        "found": r.found,
        "definitions": list(r.definitions),
    })

@app.post("/api/refresh")
def api_refresh_start():
    _service.refresh()  # type: ignore
    return jsonify(_service.status()), 202  # type: ignore

@app.get("/api/refresh")
def api_refresh_status():
    return jsonify(_service.status())  # type: ignore

@app.get("/api/health")
def api_health():
    st = _service.stats()  # type: ignore
    return jsonify({"ok": True, "loaded": st["loaded"], "acronyms": st["acronyms"]})

# ---------- UI ----------
@app.get("/")
def home():
    # Single page: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Acronyms • WTF?</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --accent-2:#22d3ee;
  --border:#1c2530;
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:760px; margin:24px auto; padding:0 16px }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; box-shadow:0 10px 30px rgba(0,0,0,.25);
}
h1{ font-size:20px; margin:0 0 8px 0; letter-spacing:.3px }
.controls{ display:flex; gap:12px; align-items:center; margin:12px 0 4px 0; flex-wrap:wrap }
.input{ flex:1; min-width:200px }
.input input{
  width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px; text-transform:uppercase;
}
.input input:focus{ border-color:var(--accent) }
.btn{
  padding:10px 14px; border-radius:10px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); cursor:pointer;
}
.btn:hover{ border-color:var(--accent-2) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
progress{ width:100%; margin-top:10px; display:none }
.err{
  display:none; margin-top:12px; padding:10px 12px; border-radius:10px;
  background:rgba(255,93,93,.12); border:1px solid rgba(255,93,93,.35); color:#ffb0b0;
}
ul.results{ margin:16px 0 0 0; padding:0; list-style:none; border:1px solid var(--border); border-radius:12px }
ul.results li{ padding:12px 14px; border-top:1px solid var(--border) }
ul.results li:first-child{ border-top:none }
.empty{ padding:24px; text-align:center; color:var(--muted) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>WTF? Acronym lookup</h1>
      <div class="controls">
        <div class="input">
          <input id="q" type="text" placeholder="e.g. BTW, U.S.A." autocomplete="off" autofocus />
        </div>
        <button id="go" class="btn">Look up</button>
        <button id="refresh" class="btn">Update dictionary</button>
      </div>
      <div id="stats" class="meta">Ready.</div>
      <progress id="bar" max="100"></progress>
      <div id="err" class="err"></div>
      <ul id="out" class="results"><li class="empty">Enter an acronym.</li></ul>
    </div>
  </div>

<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), err = $("#err"), stats = $("#stats"), bar = $("#bar");

function esc(s){ return String(s).replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
function showError(msg){ err.style.display = "block"; err.textContent = msg; }

async function lookup(){
  const query = q.value.trim();
  err.style.display = "none";
  if(!query){ out.innerHTML = '<li class="empty">Enter an acronym.</li>'; return; }
  try{
    const resp = await fetch(`/api/lookup?q=${encodeURIComponent(query)}`);
    const data = await resp.json();
    if(resp.status === 503){ showError("No dictionary yet. Use “Update dictionary”."); return; }
    if(!resp.ok) throw new Error(data.error || `HTTP ${resp.status}`);
    if(!data.found){ out.innerHTML = `<li class="empty">${esc(data.acronym)}: no match.</li>`; return; }
    out.innerHTML = data.definitions.map(d => `<li>${esc(d)}</li>`).join("");
    stats.textContent = `${data.acronym}: ${data.definitions.length} definition(s)`;
  }catch(e){ showError(`Error: ${e.message ?? e}`); }
}

async function poll(){
  const resp = await fetch("/api/refresh");
  const st = await resp.json();
  if(st.state === "running"){
    bar.style.display = "block";
    if(st.percent === null){ bar.removeAttribute("value"); } else { bar.value = st.percent; }
    stats.textContent = st.message;
    setTimeout(poll, 500);
    return;
  }
  bar.style.display = "none";
  stats.textContent = st.message || "Ready.";
  if(st.state === "failed") showError(st.message);
}

async function refresh(){
  err.style.display = "none";
  await fetch("/api/refresh", {method: "POST"});
  poll();
}

$("#go").addEventListener("click", lookup);
$("#refresh").addEventListener("click", refresh);
q.addEventListener("keydown", (ev)=>{ if(ev.key === "Enter") lookup(); });
poll();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def start_service(path=None, url=None, *, fetch_if_missing: bool = True) -> AcronymService:
    """Create the service; an unreadable dictionary leaves it unloaded (lookups answer 503)."""
    svc = AcronymService(path=path, url=url)
    try:
        svc.bootstrap(fetch_if_missing=fetch_if_missing)
    except LoadError as exc:
        log.error("%s", exc)
    return svc

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the acronym lookup web UI")
    ap.add_argument("--db", default=None, help="Path of the local dictionary file")
    ap.add_argument("--url", default=None, help="Where to download the dictionary from")
    ap.add_argument("--no-fetch", action="store_true", help="Do not download a missing dictionary")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    global _service
    _service = start_service(args.db, args.url, fetch_if_missing=not args.no_fetch)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose, use_reloader=False)
    finally:
        _service.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
