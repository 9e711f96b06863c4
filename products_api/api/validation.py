"""
Request validation pipeline.

A route declares an ordered list of ``Rule`` objects. ``check_request`` runs
all of them, collects one ``FieldError`` per failed rule and raises
``ValidationFailed`` so the route handler never runs on bad input.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple

from fastapi import Request

from products_api.errors import ValidationFailed
from products_api.schemas.product import FieldError

PARAMS = "params"
BODY = "body"

_MISSING = object()

Check = Callable[[Any], bool]


@dataclass(frozen=True)
class Rule:
    location: str
    field: str
    check: Check
    message: str


def param(field: str, *checks: Tuple[Check, str]) -> List[Rule]:
    """Rules for one path parameter, in the order given"""
    return [Rule(PARAMS, field, check, message) for check, message in checks]


def body(field: str, *checks: Tuple[Check, str]) -> List[Rule]:
    """Rules for one JSON body field, in the order given"""
    return [Rule(BODY, field, check, message) for check, message in checks]


def run_rules(rules: Sequence[Rule], sources: Dict[str, Dict[str, Any]]) -> List[FieldError]:
    errors = []
    for rule in rules:
        value = sources.get(rule.location, {}).get(rule.field, _MISSING)
        if rule.check(None if value is _MISSING else value):
            continue

        error = {"type": "field"}
        if value is not _MISSING:
            error["value"] = value
        error.update(msg=rule.message, path=rule.field, location=rule.location)
        errors.append(FieldError(**error))
    return errors


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Parsed JSON object body; anything else validates as an empty object"""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


async def check_request(request: Request, rules: Sequence[Rule]) -> Dict[str, Dict[str, Any]]:
    """Run every rule against the request; return the validated sources"""
    sources = {PARAMS: dict(request.path_params), BODY: {}}
    if any(rule.location == BODY for rule in rules):
        sources[BODY] = await read_json_body(request)

    errors = run_rules(rules, sources)
    if errors:
        raise ValidationFailed(errors)
    return sources
