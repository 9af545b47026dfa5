import os, logging
from typing import List, Tuple
from datetime import date as _date, datetime

import duckdb
from pydantic import BaseModel, Field, ValidationError
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

log = logging.getLogger("uvicorn.error")

# ---- App/version
APP_VERSION = "0.1.0"
app = FastAPI(title="Carbon Analytics API", version=APP_VERSION)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

# ---- Paths / config
DEFAULT_EMISSIONS_CSV = "./data/emissions.csv"
DATA_TABLE = "emissions"

# ----- Payload models -----
class DailyRecord(BaseModel):
    date: str
    co2: float = Field(..., ge=0)

class WeeklyRecord(BaseModel):
    week: str
    co2: float = Field(..., ge=0)

class MonthlyRecord(BaseModel):
    month: str
    co2: float = Field(..., ge=0)

class AnalyticsPayload(BaseModel):
    daily: List[DailyRecord] = []
    weekly: List[WeeklyRecord] = []
    monthly: List[MonthlyRecord] = []

# ---- label helpers
def _as_date(d) -> _date:
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, _date):
        return d
    return _date.fromisoformat(str(d)[:10])

def _day_label(d) -> str:
    return _as_date(d).isoformat()

def _week_label(d) -> str:
    # ISO week, e.g. 2024-W03
    year, week, _ = _as_date(d).isocalendar()
    return f"{year}-W{week:02d}"

def _month_label(d) -> str:
    return _as_date(d).strftime("%Y-%m")

# ===================== DuckDB rollups =====================
def _resolve_emissions_csv() -> str:
    return os.environ.get("EMISSIONS_CSV", "").strip() or DEFAULT_EMISSIONS_CSV

def _connect(csv_path: str):
    """
    In-memory DuckDB with a normalized view over the CSV:
      date (DATE), co2 (DOUBLE)
    Extra columns in the file are ignored; rows without a date are dropped.
    """
    if not os.path.exists(csv_path):
        raise HTTPException(status_code=404, detail=f"emissions file not found: {csv_path}")
    con = duckdb.connect()
    try:
        path_sql = csv_path.replace("'", "''")
        con.execute(f"""
        CREATE OR REPLACE VIEW __raw_emissions AS
        SELECT * FROM read_csv_auto('{path_sql}', header=TRUE);
        """)
        cols = [r[1] for r in con.execute("PRAGMA table_info('__raw_emissions')").fetchall()]
        lower = {c.lower(): c for c in cols}
        missing = [c for c in ("date", "co2") if c not in lower]
        if missing:
            raise HTTPException(status_code=422, detail=f"emissions file lacks columns: {missing}")
        con.execute(f"""
        CREATE OR REPLACE VIEW {DATA_TABLE} AS
        SELECT
          CAST("{lower['date']}" AS DATE)      AS date,
          CAST("{lower['co2']}" AS DOUBLE)     AS co2
        FROM __raw_emissions
        WHERE "{lower['date']}" IS NOT NULL;
        """)
    except Exception:
        con.close()
        raise
    return con

def _rollup(con, grain: str) -> List[Tuple[_date, float]]:
    # grain is one of day/week/month; duckdb weeks start on Monday (ISO)
    rows = con.execute(f"""
        SELECT
          date_trunc('{grain}', date)::DATE AS bucket,
          COALESCE(SUM(co2), 0)::DOUBLE     AS co2
        FROM {DATA_TABLE}
        GROUP BY 1
        ORDER BY 1
    """).fetchall()
    return [(r[0], float(r[1])) for r in rows]

def build_payload(csv_path: str) -> AnalyticsPayload:
    con = _connect(csv_path)
    try:
        daily = _rollup(con, "day")
        weekly = _rollup(con, "week")
        monthly = _rollup(con, "month")
    finally:
        con.close()
    return AnalyticsPayload(
        daily=[DailyRecord(date=_day_label(d), co2=v) for d, v in daily],
        weekly=[WeeklyRecord(week=_week_label(d), co2=v) for d, v in weekly],
        monthly=[MonthlyRecord(month=_month_label(d), co2=v) for d, v in monthly],
    )

# ===================== Health =====================
@app.get("/health")
def health():
    resolved = _resolve_emissions_csv()
    return {"status": "ok", "version": APP_VERSION, "emissions_csv": resolved, "exists": os.path.exists(resolved)}

# ===================== Analytics =====================
@app.get("/analytics", response_model=AnalyticsPayload)
def analytics() -> AnalyticsPayload:
    resolved = _resolve_emissions_csv()
    try:
        payload = build_payload(resolved)
    except ValidationError as e:
        log.error("emissions data in %s failed validation: %s", resolved, e)
        raise HTTPException(status_code=422, detail=f"emissions data is invalid: {e.error_count()} bad value(s), co2 must be >= 0")
    log.info("analytics payload built from %s: days=%d weeks=%d months=%d",
             resolved, len(payload.daily), len(payload.weekly), len(payload.monthly))
    return payload
