"""Node.js runtime that reads its program from stdin."""

from __future__ import annotations

from typing import Any

from extruntime.runtime.descriptor import ExternalRuntime

NODE_NAME = "Node.js (V8)"

NODE_RUNNER_SOURCE = """\
(function(program, execJS) { execJS(program) })(function() { #{source}
}, function(program) {
  var print = function(string) {
    process.stdout.write('' + string + '\\n');
  };
  try {
    var result = program();
    if (typeof result == 'undefined' && result !== null) {
      print('["ok"]');
    } else {
      try {
        print(JSON.stringify(['ok', result]));
      } catch (err) {
        print(JSON.stringify(['err', '' + err, err.stack]));
      }
    }
  } catch (err) {
    print(JSON.stringify(['err', '' + err, err.stack]));
  }
});
"""


def node_runtime(**options: Any) -> ExternalRuntime:
    """Return a runtime for ``node``, falling back to ``nodejs``."""

    runtime = ExternalRuntime(
        NODE_NAME, ["node"], NODE_RUNNER_SOURCE, **options
    )
    if runtime.is_available():
        return runtime
    return ExternalRuntime(
        NODE_NAME, ["nodejs"], NODE_RUNNER_SOURCE, **options
    )


__all__ = ["NODE_NAME", "NODE_RUNNER_SOURCE", "node_runtime"]
