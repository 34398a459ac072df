import json

from pytest_benchmark import utils

from letdispatch import Any, let


@let(str)
def _cleanup(obj):
    return obj


@let(int)
def _cleanup(obj):
    return obj


@let(float)
def _cleanup(obj):
    return obj


@let(bool)
def _cleanup(obj):
    return obj


@let(type(None))
def _cleanup(obj):
    return obj


@let(list)
def _cleanup(obj):
    return [_cleanup(x) for x in obj]


@let(dict)
def _cleanup(obj):
    return {k: _cleanup(v) for k, v in obj.items()}


@let(Any)
def _cleanup(obj):
    return f"UNSERIALIZABLE[{obj}]"


def safer_dumps(obj, **kwargs):
    # multimethod is not safe for dump of benchmarks because it's a subclass of dict
    # with non-str keys and the json serialization just craps out.
    return json.dumps(_cleanup(obj), **kwargs)


utils._cleanup = _cleanup
utils.safe_dumps.__code__ = safer_dumps.__code__
