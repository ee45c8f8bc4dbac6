import json

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def json_response(data, status_code: int = 200):
    """Return an API Gateway response with a JSON body."""
    return {
        "statusCode": status_code,
        "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
        "body": json.dumps(data, default=str),
    }


def text_response(text: str, status_code: int = 200):
    return {
        "statusCode": status_code,
        "headers": {**CORS_HEADERS, "Content-Type": "text/plain"},
        "body": text,
    }


def error(message: str, status_code: int = 400):
    """Return an API Gateway response with an ``{"error": message}`` body."""
    return json_response({"error": message}, status_code=status_code)
