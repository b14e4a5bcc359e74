# tests/utils/source_tree.py
"""A miniature jQuery-shaped source tree for build tests.

Every module follows the conventions of the real sources: one
``define( [ deps ], function( jQuery ) { ... } );`` per file and
``var/`` modules that only return a value. Bodies set a distinctive
property so tests can check which modules made it into a bundle.
"""

import json
from pathlib import Path
from typing import Any

import jquery_builder.config as mod_config
from jquery_builder.types import BuildContext, BuildTables


def _module(deps: list[str], body: str, *, returns: bool = False) -> str:
    dep_lines = ",\n".join(f'\t"{d}"' for d in deps)
    tail = "\nreturn jQuery;\n" if returns else "\n"
    return (
        f"define( [\n{dep_lines}\n], function( jQuery ) {{\n\n"
        f'"use strict";\n\n{body}\n{tail}\n}} );\n'
    )


def _var_module(value: str) -> str:
    return f'define( function() {{\n\t"use strict";\n\n\treturn {value};\n}} );\n'


WRAPPER = """\
/* eslint-disable no-unused-vars */
/*!
 * jQuery JavaScript Library v@VERSION
 * Date: @DATE
 */
( function( global, factory ) {

"use strict";

module.exports = factory( global );

} )( typeof window !== "undefined" ? window : this, function( window ) {

"use strict";

// @CODE
// build.js inserts compiled jQuery here

return jQuery;
} );
"""

ENTRY = """\
define( [
\t"./core",
\t"./selector",
\t"./css",
\t"./dimensions",
\t"./offset",
\t"./ajax",
\t"./effects",
\t"./queue",
\t"./deferred",
\t"./core/ready",
\t"./exports/global",
\t"./exports/amd"
], function( jQuery ) {

"use strict";

return jQuery;

} );
"""

CORE = """\
define( [
\t"./var/arr"
], function( arr ) {

"use strict";

var jQuery = function() {};
jQuery.fn = jQuery.prototype = { length: arr.length };

return jQuery;
} );
"""

EXPORTS_AMD = """\
define( [
\t"../core"
], function( jQuery ) {

"use strict";

if ( typeof define === "function" && define.amd ) {
\tdefine( "jquery", [], function() {
\t\treturn jQuery;
\t} );
}

} );
"""

EXPORTS_GLOBAL = _module(
    ["../core"],
    "var _jQuery = window.jQuery;\n"
    "jQuery.noConflict = function() {\n\treturn _jQuery;\n};\n"
    "window.jQuery = window.$ = jQuery;",
)

SOURCE_FILES: dict[str, str] = {
    "wrapper.js": WRAPPER,
    "jquery.js": ENTRY,
    "core.js": CORE,
    "var/arr.js": _var_module("[]"),
    "selector.js": _module(["./core"], 'jQuery.find = "sizzle";'),
    "selector-native.js": _module(["./core"], 'jQuery.find = "native";'),
    "css.js": _module(
        ["./core", "./css/showHide"], "jQuery.fn.css = function() {};", returns=True
    ),
    "css/showHide.js": _module(["../core"], "jQuery.fn.show = function() {};"),
    "css/hiddenVisibleSelectors.js": _module(
        ["../core", "../selector"], "jQuery.expr.hidden = true;"
    ),
    "dimensions.js": _module(["./core", "./css"], "jQuery.fn.width = 0;"),
    "offset.js": _module(["./core", "./css"], "jQuery.fn.offset = 0;"),
    "ajax.js": _module(
        ["./core", "./ajax/xhr", "./ajax/script", "./ajax/var/location"],
        "jQuery.ajax = function() {};\n"
        "/* ExcludeStart */\njQuery.ajaxDebug = true;\n/* ExcludeEnd */",
        returns=True,
    ),
    "ajax/xhr.js": _module(["../core"], "jQuery.ajaxSettings = { xhr: true };"),
    "ajax/script.js": _module(["../core"], "jQuery.ajaxScript = true;"),
    "ajax/var/location.js": _var_module("window.location"),
    "manipulation/_evalUrl.js": _module(["../ajax"], "jQuery._evalUrl = true;"),
    "deprecated/ajax-event-alias.js": _module(
        ["../ajax"], "jQuery.fn.ajaxStart = 0;"
    ),
    "effects.js": _module(
        ["./core", "./css", "./queue"],
        "jQuery.fn.animate = function() {};\n// BuildExclude\njQuery.fx.debug = true;",
    ),
    "effects/animatedSelector.js": _module(["../core"], "jQuery.expr.animated = 1;"),
    "queue.js": _module(["./core", "./deferred"], "jQuery.fn.queue = function() {};"),
    "callbacks.js": _module(["./core"], "jQuery.Callbacks = function() {};"),
    "deferred.js": _module(
        ["./core", "./callbacks"], "jQuery.Deferred = function() {};"
    ),
    "core/ready.js": _module(
        ["../core", "../deferred"], "jQuery.readyWithDeferred = 1;"
    ),
    "core/ready-no-deferred.js": _module(["../core"], "jQuery.readyNoDeferred = 1;"),
    "exports/global.js": EXPORTS_GLOBAL,
    "exports/amd.js": EXPORTS_AMD,
}


def make_source_tree(
    root: Path,
    *,
    version: str = "4.0.0-pre",
    files: dict[str, str] | None = None,
) -> Path:
    """Write package.json and ``src/`` under ``root``; return the src dir.

    ``files`` entries are added to (or replace) the default modules; a
    value of ``""`` deletes the module from the tree.
    """
    src = root / "src"
    merged = {**SOURCE_FILES, **(files or {})}
    for rel, text in merged.items():
        if not text:
            continue
        path = src / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    (root / "package.json").write_text(
        json.dumps({"name": "jquery", "version": version}), encoding="utf-8"
    )
    return src


def make_tables(
    remove_with: dict[str, Any] | None = None,
    **kwargs: Any,
) -> BuildTables:
    """Tables built from an explicit removeWith, ignoring the defaults."""
    tables = mod_config.make_tables(kwargs)  # type: ignore[arg-type]
    if remove_with is None:
        return tables
    return BuildTables(
        remove_with={
            module: mod_config._parse_remove_with(module, entry, source="test")  # pyright: ignore[reportPrivateUsage]
            for module, entry in remove_with.items()
        },
        minimum=tables.minimum,
        slim_exclude=tables.slim_exclude,
    )


def make_context(
    root: Path,
    *,
    tables: BuildTables | None = None,
    **kwargs: Any,
) -> BuildContext:
    """Source tree plus a BuildContext over it, default tables unless given."""
    src = make_source_tree(root)
    return BuildContext(
        root=root,
        src_dir=src,
        base_version="4.0.0-pre",
        tables=tables or mod_config.make_tables(),
        **kwargs,
    )
