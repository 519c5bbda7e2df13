"""Quickstart example for i18nbundler.

This example demonstrates bundling layered property files, substituting
markers in a streamed page, programmatic lookup and locale forwarding.

Note: Examples ignore some 'errors' return values for brevity. In production,
always check errors and log/report translation issues.
"""

import io
import tempfile
from datetime import date
from pathlib import Path

from i18nbundler import AppConfig, I18nBundler, Scope
from i18nbundler.runtime import CollectingReporter

FILES = {
    "default/resources/i18n/en.properties": "app.title=Trading\napp.greeting=Hello [name]!\n",
    "default/resources/i18n/de.properties": "app.title=Handel\napp.greeting=Hallo [name]!\n",
    "default/orders/grid/resources/i18n/en.properties": (
        "app.title=Orders\norders.count=You have [n] open orders\n"
    ),
    "default/orders/grid/resources/i18n/de.properties": (
        "app.title=Aufträge\norders.count=Sie haben [n] offene Aufträge\n"
    ),
}

PAGE = """<html>
<head><title>@{app.title}</title></head>
<body>
<h1>@{app.greeting}</h1>
<p>@{orders.count}</p>
<p>@{date:today} / @{number:total}</p>
<p>@{orders.missing}</p>
</body>
</html>
"""

with tempfile.TemporaryDirectory() as tmp:
    root = Path(tmp)
    for relative, text in FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    config = AppConfig("trader", ("en", "de"))
    grid = Scope.aspect("default").bladeset("orders", i18n=False).blade("grid")
    bundler = I18nBundler.from_directory(config, grid, root)

    # Example 1: Merged token tables
    print("=" * 50)
    print("Example 1: Merged Token Tables")
    print("=" * 50)

    print(bundler.render_properties_bundle("de"))
    # Output:
    # app.greeting=Hallo [name]!
    # app.title=Aufträge
    # orders.count=Sie haben [n] offene Aufträge

    # Example 2: Streaming substitution
    print("=" * 50)
    print("Example 2: Streaming Substitution")
    print("=" * 50)

    reporter = CollectingReporter()
    engine = bundler.engine("de", reporter=reporter)
    params = {"name": "Anna", "n": 3, "today": date(2024, 3, 5), "total": 1234567.5}
    sink = io.StringIO()
    engine.transform_file(io.StringIO(PAGE), sink, params, chunk_size=16)
    print(sink.getvalue())
    print(f"Missing tokens: {reporter.missing_keys()}")
    # Output: Missing tokens: ('orders.missing',)

    # Example 3: Programmatic lookup
    print("\n" + "=" * 50)
    print("Example 3: Programmatic Lookup")
    print("=" * 50)

    i18n = bundler.translator("en")
    print(i18n("app.greeting", {"name": "Bob"}))
    # Output: Hello Bob!
    print(i18n.date(date(2024, 3, 5)))
    # Output: 05/03/2024
    print(i18n.number(1234567))
    # Output: 1,234,567

    # Example 4: Locale forwarding
    print("\n" + "=" * 50)
    print("Example 4: Locale Forwarding")
    print("=" * 50)

    decision = bundler.forwarder.decide("/trader/", accept_language="de-AT,en;q=0.8")
    print(decision.status, dict(decision.headers())["Location"], decision.source)
    # Output: 302 /trader/de/ accept_language

    # Example 5: Client bundle and validation
    print("\n" + "=" * 50)
    print("Example 5: Client Bundle and Validation")
    print("=" * 50)

    print(bundler.render_js_bundle("en"))
    print(bundler.validate().format())
    # Output: Validation passed: 0 warning(s)

    bundler.close()
