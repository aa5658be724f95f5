"""Request parsing helpers shared by route files."""

from datetime import datetime
from flask import request

from askverba.errors import ValidationError

MAX_PER_PAGE = 100


def get_pagination(default_limit=20):
    """Read page/limit query params. Limit is capped at MAX_PER_PAGE."""
    page = max(request.args.get('page', 1, type=int), 1)
    limit = request.args.get('limit', default_limit, type=int)
    limit = min(max(limit, 1), MAX_PER_PAGE)
    return page, limit


def parse_bool(value):
    """Parse a query-string boolean. Returns None when absent."""
    if value is None:
        return None
    return str(value).lower() in ('true', '1', 'yes')


def parse_date(value, field):
    """Parse an ISO date/datetime query param, or None when absent."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date")


def check_allowed_fields(data, allowed):
    """Reject unknown fields (prevents mass assignment)."""
    unknown = set(data.keys()) - set(allowed)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")


def check_choice(data, field, choices):
    if field in data and data[field] is not None and data[field] not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(choices)}")


def paginated(query, page, limit):
    """Paginate a query into the list response shape."""
    result = query.paginate(page=page, per_page=limit, error_out=False)
    return {
        'docs': [item.to_dict() for item in result.items],
        'totalDocs': result.total,
        'page': page,
        'limit': limit,
        'totalPages': result.pages,
        'hasNextPage': result.has_next
    }


def get_json_object():
    """Request JSON body as a dict. Missing or unparsable bodies give {}.

    Raises ValidationError when the body is valid JSON but not an object.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
