"""Single-page intake form that drives the workspace API."""

from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from diet_planner.domain.patient import ActivityLevel, DietaryPreference

router = APIRouter(tags=["page"])


@router.get("/", response_class=HTMLResponse)
async def intake_page() -> HTMLResponse:
    """Serve the upload, extract and generate form."""
    return HTMLResponse(render_page())


def render_page() -> str:
    """Render the form with the current option lists."""
    return (
        _PAGE_HTML.replace("__ACTIVITY_OPTIONS__", _options(list(ActivityLevel)))
        .replace("__PREFERENCE_OPTIONS__", _options(list(DietaryPreference)))
        .replace("__SEX_OPTIONS__", _options(["Male", "Female"]))
    )


def _options(values: list[str]) -> str:
    return "".join(
        f'<option value="{escape(str(value))}">{escape(str(value))}</option>'
        for value in values
    )


_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Prescription to Diet Plan</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; max-width: 960px; }
      h1 { margin-bottom: 0.5rem; }
      .grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 0.75rem; }
      .row { margin-bottom: 1rem; }
      label { display: block; font-size: 0.85rem; color: #444; }
      input, select, textarea { padding: 0.4rem 0.6rem; width: 100%; box-sizing: border-box; }
      button { padding: 0.5rem 1rem; margin-right: 0.5rem; }
      button:disabled { opacity: 0.5; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; white-space: pre-wrap; }
      #error { color: #b00020; min-height: 1.2rem; }
    </style>
  </head>
  <body>
    <h1>Prescription to Diet Plan</h1>
    <div class="row">
      <label for="files">Prescriptions / lab reports (images or PDF)</label>
      <input id="files" type="file" multiple accept="image/*,application/pdf" />
      <div id="file-list"></div>
    </div>
    <div class="grid row">
      <div><label>Name</label><input data-field="name" /></div>
      <div><label>Age</label><input data-field="age" type="number" /></div>
      <div><label>Sex</label><select data-field="sex">__SEX_OPTIONS__</select></div>
      <div><label>Weight (kg)</label><input data-field="weight" type="number" /></div>
      <div><label>Height (cm)</label><input data-field="height" type="number" /></div>
      <div><label>Activity</label><select data-field="activity_level">__ACTIVITY_OPTIONS__</select></div>
      <div><label>Allergies (comma-separated)</label><input data-field="allergies" /></div>
      <div><label>Dietary preference</label><select data-field="dietary_preference">__PREFERENCE_OPTIONS__</select></div>
      <div><label>Estimated calories</label><strong id="calories">-</strong> kcal/day</div>
    </div>
    <div class="row">
      <label>Notes</label><textarea data-field="notes" rows="3"></textarea>
    </div>
    <div class="row">
      <button id="extract">1. Extract</button>
      <button id="generate">2. Generate diet</button>
      <span id="status"></span>
    </div>
    <div id="error"></div>
    <h2>Extracted text</h2>
    <pre id="extracted">Nothing extracted yet.</pre>
    <h2>Diet plan</h2>
    <div id="diet"><pre>No diet plan yet.</pre></div>
    <script>
      let workspace = null;

      async function call(method, path, body, isForm) {
        const options = { method };
        if (body !== undefined) {
          options.body = isForm ? body : JSON.stringify(body);
          if (!isForm) options.headers = { 'Content-Type': 'application/json' };
        }
        const res = await fetch(path, options);
        const data = await res.json().catch(() => ({}));
        if (!res.ok) throw new Error(data.detail || ('Request failed: ' + res.status));
        return data;
      }

      function render(state) {
        workspace = state;
        document.getElementById('calories').textContent = state.calorie_estimate;
        document.getElementById('error').textContent = state.error || '';
        document.getElementById('status').textContent = state.is_processing ? 'Processing...' : '';
        document.getElementById('extract').disabled = state.is_processing;
        document.getElementById('generate').disabled = state.is_processing;
        document.getElementById('file-list').textContent =
          state.files.map((f) => f.filename).join(', ');
        if (state.extracted_text !== null) {
          document.getElementById('extracted').textContent = state.extracted_text;
        }
        const diet = document.getElementById('diet');
        const result = state.diet_result;
        if (result) {
          if (result.diet_chart_html) {
            diet.innerHTML = result.diet_chart_html;
          } else {
            const pre = document.createElement('pre');
            pre.textContent = result.diet_chart_markdown || JSON.stringify(result, null, 2);
            diet.replaceChildren(pre);
          }
        }
      }

      async function run(action) {
        try {
          render(await action());
        } catch (err) {
          console.error(err);
          document.getElementById('error').textContent = err.message;
        }
      }

      document.querySelectorAll('[data-field]').forEach((el) => {
        el.addEventListener('change', () => run(() =>
          call('PATCH', '/workspaces/' + workspace.id + '/patient',
               { [el.dataset.field]: el.value })));
      });

      document.getElementById('files').addEventListener('change', (event) => {
        const form = new FormData();
        for (const file of event.target.files) form.append('files', file);
        run(() => call('PUT', '/workspaces/' + workspace.id + '/files', form, true));
      });

      document.getElementById('extract').addEventListener('click', () => {
        document.getElementById('status').textContent = 'Extracting...';
        run(() => call('POST', '/workspaces/' + workspace.id + '/extract'));
      });

      document.getElementById('generate').addEventListener('click', () => {
        document.getElementById('status').textContent = 'Generating...';
        run(() => call('POST', '/workspaces/' + workspace.id + '/generate-diet'));
      });

      run(async () => {
        const state = await call('POST', '/workspaces');
        document.querySelectorAll('[data-field]').forEach((el) => {
          el.value = state.patient[el.dataset.field];
        });
        return state;
      });
    </script>
  </body>
</html>
"""
