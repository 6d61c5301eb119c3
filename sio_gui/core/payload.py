import json
import math


def _reject_constant(name):
    # NaN / Infinity are not JSON; treat the text as a plain string
    raise ValueError(f"non-JSON constant {name}")


def _finite_float(text):
    value = float(text)
    if math.isinf(value):
        # 1e400 and friends overflow to inf, which has no JSON form
        raise ValueError(f"number out of range {text}")
    return value


def coerce_payload(text: str):
    """
    Turn operator-typed body text into the value that gets emitted.

    Anything that parses as JSON becomes the parsed value (object, array,
    number, string, true/false/null). Everything else, the empty string
    included, is returned untouched as a plain string payload.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, TypeError):
        return text
