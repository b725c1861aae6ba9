"""HTML page for the editable message grid."""


def render_grid_page_html(title: str = "Message Triage") -> str:
    """Render the single-page grid UI.

    The page talks to the JSON endpoints in ``main.py``; it keeps no state of
    its own beyond the rows last fetched from the server.
    """
    return """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>__TITLE__</title>
  <style>
    :root {
      --line: #d4d4d8;
      --muted: #71717a;
      --good: #166534;
      --warn: #b45309;
      --bad: #b91c1c;
      --sans: "Segoe UI", system-ui, sans-serif;
    }
    * { box-sizing: border-box; }
    body { margin: 0; font-family: var(--sans); color: #18181b; }
    .wrap { padding: 12px; }
    .toolbar { display: flex; justify-content: end; gap: 10px; margin-bottom: 10px; }
    button {
      padding: 6px 16px;
      background: #fff;
      border: 1px solid #ccc;
      border-radius: 6px;
      box-shadow: 0 1px 3px rgba(0,0,0,0.1);
      cursor: pointer;
    }
    table { width: 100%; border-collapse: collapse; }
    th, td { border: 1px solid var(--line); padding: 6px 8px; text-align: left; vertical-align: top; }
    th { background: #f4f4f5; font-weight: 600; }
    td[contenteditable] { background: #fff; min-width: 240px; }
    td[contenteditable]:focus { outline: 2px solid #2563eb; }
    td.loading { color: var(--muted); font-style: italic; }
    .status-Automated { color: var(--good); font-weight: 600; }
    .status-Needs-Review { color: var(--warn); font-weight: 600; }
    .copy { padding: 2px 6px; margin-left: 6px; font-size: .8rem; box-shadow: none; }
    #toasts { position: fixed; bottom: 16px; right: 16px; display: grid; gap: 8px; }
    .toast { padding: 10px 14px; border-radius: 8px; background: #18181b; color: #fff; font-size: .9rem; }
    .toast.error { background: var(--bad); }
    .toast.success { background: var(--good); }
  </style>
</head>
<body>
  <div class="wrap">
    <div class="toolbar">
      <button id="add-row">Add Row</button>
      <button id="clear-all">Clear All</button>
    </div>
    <table>
      <thead><tr id="header"></tr></thead>
      <tbody id="rows"></tbody>
    </table>
  </div>
  <div id="toasts"></div>
  <script>
    let columns = [];
    let mountKey = null;

    function toast(message, kind, sticky) {
      const el = document.createElement("div");
      el.className = "toast " + (kind || "");
      el.textContent = message;
      document.getElementById("toasts").appendChild(el);
      if (!sticky) setTimeout(() => el.remove(), 2500);
      return el;
    }

    async function api(method, path, body) {
      const res = await fetch(path, {
        method,
        headers: { "Content-Type": "application/json" },
        body: body ? JSON.stringify(body) : undefined,
      });
      if (!res.ok) throw new Error(res.status + " " + (await res.text()));
      return res.json();
    }

    function renderRow(tr, row) {
      tr.innerHTML = "";
      tr.dataset.id = row.id;
      tr.dataset.last = row.message;
      for (const col of columns) {
        const td = document.createElement("td");
        if (col.editable) {
          td.contentEditable = "true";
          td.textContent = row[col.field];
          td.addEventListener("blur", () => onEdit(tr, td, col.field));
          td.addEventListener("keydown", (e) => {
            if (e.key === "Enter") { e.preventDefault(); td.blur(); }
          });
        } else {
          td.textContent = row[col.field];
          if (col.field === "status" && row.status) {
            td.className = "status-" + row.status.replace(" ", "-");
          }
          if (col.copyable && row[col.field]) {
            const btn = document.createElement("button");
            btn.className = "copy";
            btn.textContent = "Copy";
            btn.addEventListener("click", async () => {
              await navigator.clipboard.writeText(row[col.field]);
              toast("Message copied!", "success");
            });
            td.appendChild(btn);
          }
        }
        tr.appendChild(td);
      }
    }

    function render(snapshot) {
      mountKey = snapshot.mount_key;
      const body = document.getElementById("rows");
      body.innerHTML = "";
      for (const row of snapshot.rows) {
        const tr = document.createElement("tr");
        renderRow(tr, row);
        body.appendChild(tr);
      }
    }

    async function refresh() {
      render(await api("GET", "/rows"));
    }

    async function onEdit(tr, td, field) {
      const value = td.textContent.trim();
      const key = mountKey;
      if (tr.dataset.last === value) return;
      tr.dataset.last = value;
      const id = tr.dataset.id;
      const loading = value ? toast("Classifying message...", "", true) : null;
      for (const cell of tr.children) if (cell !== td) cell.classList.add("loading");
      try {
        const result = await api("PATCH", "/rows/" + id, { field, value });
        if (key !== mountKey) return;
        if (result.degraded) toast("Classification failed, row needs review", "error");
        // Rows may have been re-rendered while the request was in flight
        const live = liveRow(id);
        if (!result.stale && live) renderRow(live, result.row);
      } catch (err) {
        toast("Classification failed", "error");
      } finally {
        if (loading) loading.remove();
        const live = liveRow(id);
        if (live) for (const cell of live.children) cell.classList.remove("loading");
      }
    }

    function liveRow(id) {
      return document.querySelector('#rows tr[data-id="' + CSS.escape(id) + '"]');
    }

    document.getElementById("add-row").addEventListener("click", async () => {
      await api("POST", "/rows");
      toast("Row added", "success");
      await refresh();
    });

    document.getElementById("clear-all").addEventListener("click", async () => {
      render(await api("POST", "/rows/clear"));
      toast("All rows cleared", "success");
    });

    (async () => {
      columns = await api("GET", "/columns");
      document.getElementById("header").innerHTML =
        columns.map((c) => "<th>" + c.headerName + "</th>").join("");
      await refresh();
    })();
  </script>
</body>
</html>
""".replace("__TITLE__", title)
