import os, time
from flask import Flask, request, jsonify

from fermatscan.audit import audit_verdicts
from fermatscan.bases import RandomBaseSource
from fermatscan.fermat import DEFAULT_TRIAL_BUDGET, fermat_test
from fermatscan.report import verdict_to_dict
from fermatscan.scan import scan_range

SCAN_LIMIT = int(os.getenv("FERMAT_SCAN_LIMIT", "100000"))
MAX_TRIALS = int(os.getenv("FERMAT_MAX_TRIALS", "1000"))

app = Flask(__name__)

def _params():
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.values

def _int_param(data, name, default=None):
    raw = data.get(name)
    if raw is None or str(raw).strip() == "":
        if default is None:
            raise ValueError(f"missing {name}")
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValueError(f"invalid {name}") from None

def _error(msg, code=400):
    d = jsonify({"status": "error", "error": msg}); d.status_code = code
    return d

def _trials(data):
    t = _int_param(data, "trials", DEFAULT_TRIAL_BUDGET)
    if not 1 <= t <= MAX_TRIALS:
        raise ValueError(f"trials must be in [1, {MAX_TRIALS}]")
    return t

def _seed(data):
    raw = data.get("seed")
    return None if raw in (None, "") else _int_param(data, "seed")

@app.route("/fermat", methods=["GET", "POST"])
def fermat_endpoint():
    t0 = time.time()
    data = _params()
    try:
        n = _int_param(data, "n")
        v = fermat_test(n, _trials(data), RandomBaseSource(_seed(data)))
    except ValueError as e:
        return _error(str(e))
    d = jsonify({"status": "ok", **verdict_to_dict(v)})
    d.headers["X-Compute-ms"] = str(int((time.time()-t0)*1000))
    return d

@app.get("/scan")
def scan_endpoint():
    t0 = time.time()
    data = request.args
    try:
        hi = _int_param(data, "max")
        lo = _int_param(data, "min", 3)
        trials = _trials(data)
        seed = _seed(data)
        if hi - lo > SCAN_LIMIT:
            raise ValueError(f"range too large (limit {SCAN_LIMIT} candidates)")
        verdicts = list(scan_range(lo, hi, trials, seed=seed))
    except ValueError as e:
        return _error(str(e))
    d = jsonify({
        "status": "ok",
        "min": str(lo),
        "max": str(hi),
        "trials": trials,
        "verdicts": [verdict_to_dict(v) for v in verdicts],
        "audit": audit_verdicts(verdicts).to_dict(),
    })
    d.headers["X-Compute-ms"] = str(int((time.time()-t0)*1000))
    return d

if __name__ == "__main__":
    app.run(host=os.getenv("FERMAT_HOST", "127.0.0.1"), port=int(os.getenv("FERMAT_PORT", "8000")))
