"""
AWS Lambda handler for the Pay Plan Calculator API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import json
import logging
import os

from payplan import CommissionEvaluator, UnsupportedPlanKind
from payplan.validators import role_fields

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Initialize evaluator (reused across warm invocations)
evaluator = CommissionEvaluator()

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - POST /calculate_pay
    - POST /validate_plan
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/calculate_pay" and http_method == "POST":
        return handle_calculate_pay(event)
    elif path == "/validate_plan" and http_method == "POST":
        return handle_validate_plan(event)
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    else:
        return _response(404, {"error": "Not found", "path": path})


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Dealership Pay Plan Calculator API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {
                "calculate_pay": "/calculate_pay [POST]",
                "validate_plan": "/validate_plan [POST]",
                "health": "/health [GET]",
            },
        },
    )


def handle_calculate_pay(event):
    """Evaluate a pay plan against a deal or deal log."""
    try:
        input_data = _parse_body(event)
        if input_data is None:
            return _response(400, {"error": "No input data provided", "status": "failed"})

        # Log request
        plan_name = (input_data.get("pay_plan") or {}).get("name", "Unknown")
        logger.info(f"Calculating pay for plan: {plan_name}")

        # Evaluate through engine
        result = evaluator.evaluate_from_dict(input_data)

        logger.info(f"Pay calculated successfully: {plan_name}")

        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except UnsupportedPlanKind as e:
        logger.error(f"Unsupported plan kind: {str(e)}")
        return _response(422, {"error": str(e), "status": "unsupported_plan_kind"})

    except (ValueError, KeyError, TypeError, AttributeError) as e:
        # Validation errors from engine (missing fields, invalid types, etc.)
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})


def handle_validate_plan(event):
    """Validate a pay plan document."""
    try:
        input_data = _parse_body(event)
        if input_data is None:
            return _response(400, {"error": "No input data provided", "status": "failed"})

        plan = evaluator.parse_plan(input_data)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.error(f"Plan validation error: {str(e)}")
        return _response(400, {"error": str(e), "status": "validation_failed"})

    return _response(200, {
        "status": "valid",
        "plan_summary": evaluator.output_builder.build_plan_summary(plan),
        "fields": role_fields(plan.role, plan.plan_type),
    })


def _parse_body(event):
    """Decode the request body. Returns None when it is empty."""
    body = event.get("body", "")
    if not isinstance(body, str):
        return body or None
    if not body:
        return None
    # Handle base64 encoded body (API Gateway)
    if event.get("isBase64Encoded"):
        import base64

        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)


def _response(status_code, payload):
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(payload)}
