"""HTML documents served by the preview server.

The preview page wraps one rendered component with its compiled styles,
the shared global stylesheet, the preview chrome styles and the core and
vendor-loader scripts. The gallery page lists every discovered component
and is rendered with the template engine itself.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from vitrine.components.models import CompiledComponent
from vitrine.config import PreviewConfig
from vitrine.environment import Environment
from vitrine.utils.html import html_escape

PREVIEW_CHROME_CSS = """\
    .vitrine-preview {
      margin: 20px;
      border: 1px solid #ddd;
      border-radius: 8px;
      overflow: hidden;
      background: white;
    }
    .vitrine-preview--responsive { width: auto; }
    .vitrine-preview__info {
      background: #f5f5f5;
      padding: 10px 15px;
      border-bottom: 1px solid #ddd;
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
    }
    .vitrine-preview__type {
      font-size: 12px;
      color: #666;
      text-transform: uppercase;
    }
    .vitrine-preview__name {
      font-size: 16px;
      font-weight: 600;
      color: #333;
      margin-left: 10px;
    }
    .vitrine-preview__content { position: relative; }"""

GALLERY_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Vitrine components</title>
  <link rel="stylesheet" href="{{static_prefix}}/global.css">
</head>
<body class="vitrine-gallery">
  <h1>Components <small>({{length components}})</small></h1>
  <ul class="vitrine-gallery__list">
  {{#each components}}
    <li class="vitrine-gallery__item">
      <a href="/preview/{{type}}/{{variation}}">{{default meta.name variation}}</a>
      <span class="vitrine-gallery__type-name">{{type}}</span>
      {{#if meta.description}}<p>{{meta.description}}</p>{{/if}}
      {{#if meta.vendors}}<p class="vitrine-gallery__vendors">Vendors: {{join meta.vendors}}</p>{{/if}}
    </li>
  {{else}}
    <li>No components found.</li>
  {{/each}}
  </ul>
</body>
</html>
"""


def hot_update_snippet(config: PreviewConfig) -> str:
    """Client script that reloads the page when its component changes."""
    return (
        "<script>\n"
        "  (function () {\n"
        "    var scheme = location.protocol === 'https:' ? 'wss://' : 'ws://';\n"
        f"    var socket = new WebSocket(scheme + location.host + '{config.static_prefix}/ws');\n"
        "    socket.onmessage = function (event) {\n"
        "      var message = JSON.parse(event.data);\n"
        "      if (message.type === 'component-update') {\n"
        "        console.log('Component updated:', message.path);\n"
        "        window.location.reload();\n"
        "      }\n"
        "    };\n"
        "  })();\n"
        "</script>\n"
    )


def inject_hot_update(html: str, config: PreviewConfig) -> str:
    """Insert the hot-update client before ``</body>`` when hot update is on."""
    if not config.hot_update:
        return html
    snippet = hot_update_snippet(config)
    index = html.rfind("</body>")
    if index == -1:
        return html + snippet
    return html[:index] + snippet + html[index:]


def _component_script(component: CompiledComponent) -> str:
    script = component.script
    vendors = component.definition.vendors
    if vendors:
        body = script or ""
        return (
            "<script>\n"
            f"  Vitrine.loadVendors({json.dumps(list(vendors))}).then(function () {{\n"
            f"{body}\n"
            "  });\n"
            "</script>"
        )
    if script:
        return f"<script>\n{script}\n</script>"
    return ""


def preview_document(component: CompiledComponent, html: str, config: PreviewConfig) -> str:
    """Full HTML page around the rendered ``html`` of ``component``."""
    definition = component.definition
    prefix = config.static_prefix
    vendor_notes = "\n".join(
        f"  <!-- Vendor: {html_escape(vendor)} will be loaded by vendor-loader.js -->"
        for vendor in definition.vendors
    )
    styles = f"  <style>\n{component.styles}\n  </style>\n" if component.styles else ""

    document = (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '  <meta charset="UTF-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"  <title>{html_escape(definition.display_name)} - Vitrine Component Preview</title>\n"
        f'  <link rel="stylesheet" href="{prefix}/global.css">\n'
        f"  <style>\n{PREVIEW_CHROME_CSS}\n  </style>\n"
        f"{styles}"
        f"{vendor_notes}\n"
        "</head>\n"
        "<body>\n"
        f"{html}\n"
        f'  <script src="{prefix}/global-assets/js/vitrine-core.js"></script>\n'
        f'  <script src="{prefix}/global-assets/js/vendor-loader.js"></script>\n'
        f"{_component_script(component)}\n"
        "</body>\n"
        "</html>\n"
    )
    return inject_hot_update(document, config)


def gallery_document(
    environment: Environment,
    components: Sequence[Mapping[str, Any]],
    config: PreviewConfig,
) -> str:
    """Index page linking to the preview of every component in ``components``."""
    template = environment.from_string(GALLERY_TEMPLATE, name="gallery")
    html = template.render({"components": list(components), "static_prefix": config.static_prefix})
    return inject_hot_update(html, config)
