"""
Central configuration for the fleet monitor engine.

Flat-constant interface shared by the aggregation engine and the synthetic
generator.  Runtime settings that come from the environment (live API URL,
timezone, seeds) live in ``api/config.py``; everything here is a fixed
property of the reports themselves.

Config Status Legend
====================
  ACTIVE      — Imported and used by running code.

Search for ``# STATUS:`` to locate all annotations.
"""
from typing import Dict, List, Tuple

# ── Live KPI window ──────────────────────────────────────────────────
WINDOW_HOURS = 12                                 # STATUS: ACTIVE — engine/report.py trailing "recent activity" window
JOB_PAGE_LIMIT = 50                               # STATUS: ACTIVE — engine/report.py, max jobs returned per response

# ── Status histogram ─────────────────────────────────────────────────
CHART_BUCKET_COUNT = 12                           # STATUS: ACTIVE — engine/histogram.py bucket count
CHART_BUCKET_MINUTES = 60                         # STATUS: ACTIVE — engine/histogram.py bucket width
CHART_STATUSES: Tuple[str, ...] = ("COMPLETED", "RUNNING", "QUEUED", "ERROR")  # STATUS: ACTIVE — statuses counted in every chart series

# ── Periodic trends ──────────────────────────────────────────────────
WEEKLY_TREND_POINTS = 4                           # STATUS: ACTIVE — engine/periodic.py, ISO weeks (Monday start)
MONTHLY_TREND_POINTS = 6                          # STATUS: ACTIVE — engine/periodic.py, calendar months

# ── Daily summary ────────────────────────────────────────────────────
CHART_PALETTE: List[str] = [                      # STATUS: ACTIVE — engine/daily.py, fill colour by first-seen backend index
    "hsl(var(--chart-1))",
    "hsl(var(--chart-2))",
    "hsl(var(--chart-3))",
    "hsl(var(--chart-4))",
    "hsl(var(--chart-5))",
]

# ── Data sources ─────────────────────────────────────────────────────
SYNTHETIC_CACHE_TTL_SECONDS = 60                  # STATUS: ACTIVE — api/cache/manager.py single-slot TTL
LIVE_JOB_FETCH_LIMIT = 5000                       # STATUS: ACTIVE — api/services/fleet_client.py ?limit= for /jobs
LIVE_OPEN_SESSIONS = 1                            # STATUS: ACTIVE — live API exposes no session count
AUTO_REFRESH_SECONDS = 15                         # STATUS: ACTIVE — client-side refresh cadence, advertised by /api/health

# ── Synthetic generator ──────────────────────────────────────────────
SYNTHETIC_JOB_COUNT = 5000                        # STATUS: ACTIVE — engine/synthetic.py default population
SYNTHETIC_HISTORY_DAYS = 180                      # STATUS: ACTIVE — engine/synthetic.py, jobs spread over ~6 months
SYNTHETIC_MAX_QUEUE_MINUTES = 30                  # STATUS: ACTIVE — engine/synthetic.py queue delay upper bound
SYNTHETIC_MAX_RUN_MINUTES = 10                    # STATUS: ACTIVE — engine/synthetic.py run time upper bound
SYNTHETIC_USERS: List[str] = ["Alice", "Bob", "Charlie", "David", "Eve"]  # STATUS: ACTIVE — engine/synthetic.py
SYNTHETIC_OPEN_SESSIONS: Tuple[int, int] = (1, 5)  # STATUS: ACTIVE — engine/synthetic.py, inclusive range
SYNTHETIC_API_SPEED_MS: Tuple[int, int] = (50, 250)  # STATUS: ACTIVE — engine/synthetic.py, inclusive range

# name -> (qubit_count, error_rate, max_queue_depth)
SYNTHETIC_BACKENDS: Dict[str, Tuple[int, float, int]] = {  # STATUS: ACTIVE — engine/synthetic.py fleet layout
    "ibm_brisbane": (127, 0.012, 10),
    "ibm_kyoto": (127, 0.015, 10),
    "ibm_osaka": (127, 0.011, 10),
    "ibmq_kolkata": (27, 0.025, 0),
    "ibmq_mumbai": (27, 0.021, 5),
    "ibmq_auckland": (27, 0.033, 0),
}

# ── Connectivity graph ───────────────────────────────────────────────
QUBIT_COUNT_TABLE: Dict[str, int] = {             # STATUS: ACTIVE — engine/synthetic.py connectivity sizing
    "ibm_brisbane": 127,
    "ibm_kyoto": 127,
    "ibm_osaka": 127,
    "ibmq_kolkata": 27,
    "ibmq_mumbai": 27,
    "ibmq_auckland": 27,
}
DEFAULT_QUBIT_COUNT = 27                          # STATUS: ACTIVE — unknown backends
CONNECTIVITY_EDGE_FACTOR = 1.5                    # STATUS: ACTIVE — edge draws per node
CONNECTIVITY_ANCILLARY_PROB = 0.2                 # STATUS: ACTIVE — share of "ancillary" nodes
CONNECTIVITY_WEIGHT_RANGE: Tuple[float, float] = (0.8, 1.0)  # STATUS: ACTIVE — entanglement strength bounds

# name -> (status, probability) of a backend reporting an outage in one snapshot
SYNTHETIC_BACKEND_OUTAGES: Dict[str, Tuple[str, float]] = {  # STATUS: ACTIVE — engine/synthetic.py
    "ibmq_kolkata": ("maintenance", 0.2),
    "ibmq_auckland": ("inactive", 0.1),
}
SYNTHETIC_CANCEL_BEFORE_RUN_PROB = 0.5            # STATUS: ACTIVE — engine/synthetic.py, CANCELLED jobs that never started
SYNTHETIC_RESULT_OUTCOMES: List[str] = ["001", "110", "101"]  # STATUS: ACTIVE — engine/synthetic.py measurement labels
SYNTHETIC_MAX_SHOTS_PER_OUTCOME = 512             # STATUS: ACTIVE — engine/synthetic.py
SYNTHETIC_MAX_QPU_SECONDS = 10.0                  # STATUS: ACTIVE — engine/synthetic.py, COMPLETED jobs only
