"""FastAPI application, wiring, and startup."""

import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from shower_tracker.adapters.notify import create_surface
from shower_tracker.adapters.storage.json_store import JsonKeyValueStore
from shower_tracker.adapters.web.presenter import WebPresenter
from shower_tracker.adapters.web.routes import create_router
from shower_tracker.config import AppConfig
from shower_tracker.domain.notification import NotificationGateway
from shower_tracker.domain.store import StateStore
from shower_tracker.engine import ShowerEngine, TickLoop
from shower_tracker.ports.outbound import RenderPort


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_engine(config: AppConfig, renderer: Optional[RenderPort] = None) -> ShowerEngine:
    """Assemble the engine from configured adapters."""
    store = StateStore(JsonKeyValueStore(config.data_dir))
    surface = create_surface(config.notify.backend, config.notify.webhook_url)
    gateway = NotificationGateway(surface, icon=config.notify.icon)
    return ShowerEngine(store, gateway, renderer=renderer)


DASHBOARD_HTML = """
<html>
  <head>
    <title>Shower Tracker</title>
    <style>
      body { font-family: monospace; max-width: 480px; margin: 50px auto; }
      .card { background: #f5f5f5; padding: 20px; border-radius: 5px; margin-top: 10px; }
      #orb { display: inline-block; width: 14px; height: 14px; border-radius: 50%; background: #4caf50; }
      .warning #orb { background: #ff9800; }
      .overdue #orb { background: #f44336; }
      #time-since { font-size: 2.5rem; }
      button { padding: 10px 20px; font-size: 16px; margin: 5px; }
      li { display: flex; justify-content: space-between; }
    </style>
  </head>
  <body>
    <h1>Shower Tracker</h1>
    <div class="card" id="status-card">
      <div id="time-since">--:--:--</div>
      <p><span id="orb"></span> <span id="status-text">Checking status...</span></p>
      <button onclick="act('POST', '/api/occurrence')">I showered</button>
    </div>
    <div class="card">
      <label>Interval
        <select id="interval" onchange="act('POST', '/api/interval', {hours: parseInt(this.value)})">
          <option value="12">12h</option><option value="24">24h</option>
          <option value="48">48h</option><option value="72">72h</option>
        </select>
      </label>
      <label><input type="checkbox" id="notif"
        onchange="act('POST', '/api/notifications', {enabled: this.checked})"> Notifications</label>
    </div>
    <div class="card">
      <h3>Alarms</h3>
      <input type="time" id="alarm-time">
      <button onclick="act('POST', '/api/alarms', {time: document.getElementById('alarm-time').value})">Add</button>
      <ul id="alarms"></ul>
    </div>
    <div class="card">
      <h3>History</h3>
      <ul id="history"></ul>
      <button onclick="reset()">Reset</button>
    </div>
    <script>
      function show(s) {
        document.getElementById('time-since').textContent = s.elapsed;
        document.getElementById('status-text').textContent = s.statusText;
        document.getElementById('status-card').className = 'card ' + (s.status || '');
        document.getElementById('interval').value = s.interval;
        document.getElementById('notif').checked = s.notificationsEnabled;
        document.getElementById('history').innerHTML = s.history.length
          ? s.history.map(h => `<li><span>Shower</span><span>${h}</span></li>`).join('')
          : '<li>No history yet</li>';
        document.getElementById('alarms').innerHTML = s.alarms.map(a =>
          `<li><span>${a.time}</span><button onclick="act('DELETE', '/api/alarms/${a.id}')">x</button></li>`
        ).join('');
        (s.alerts || []).forEach(m => alert(m));
      }
      async function act(method, url, body) {
        const res = await fetch(url, {method, headers: {'Content-Type': 'application/json'},
                                      body: body ? JSON.stringify(body) : undefined});
        const data = await res.json();
        if (!res.ok) { alert(data.detail); return refresh(); }
        if (data.message && !data.ok) alert(data.message);
        show(data.state);
      }
      function reset() {
        if (confirm("Are you sure you want to reset your shower history? This cannot be undone.")) {
          act('POST', '/api/reset', {confirm: true});
        }
      }
      async function refresh() { show(await (await fetch('/api/status')).json()); }
      refresh();
      setInterval(refresh, 1000);
    </script>
  </body>
</html>
"""


def create_app(config: Optional[AppConfig] = None, engine: Optional[ShowerEngine] = None) -> FastAPI:
    """Build the web app. Pass an engine to bypass config-driven wiring (tests)."""
    config = config or AppConfig.from_env()
    presenter = WebPresenter()
    if engine is None:
        engine = build_engine(config, renderer=presenter)
    else:
        engine.renderer = presenter

    app = FastAPI(title="Shower Tracker")
    app.include_router(create_router(engine, presenter))
    app.state.engine = engine
    app.state.tick_loop = TickLoop(engine.tick, config.tick_seconds)

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """Widget page"""
        return DASHBOARD_HTML

    @app.on_event("startup")
    async def startup_event():
        _log("Shower tracker starting")
        _log(f"Data dir: {config.data_dir}")
        _log(f"Notifications: {config.notify.backend} ({engine.gateway.permission.value})")
        app.state.tick_loop.start()
        _log("Ready!")

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.tick_loop.stop()

    return app
