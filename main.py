from flask import Flask, request, jsonify
from flask_cors import CORS
from payplan import CommissionEvaluator, UnsupportedPlanKind
from payplan.validators import role_fields
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (plan screens and deal logs call from the browser)
CORS(app, origins="*", send_wildcard=True)

# Initialize the commission evaluator
evaluator = CommissionEvaluator()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Dealership Pay Plan Calculator API",
        "version": "1.0",
        "endpoints": {
            "calculate_pay": "/calculate_pay [POST]",
            "validate_plan": "/validate_plan [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/calculate_pay", methods=["POST"])
def calculate_pay():
    """
    Evaluate a pay plan against a deal or a month's deal log
    """
    try:
        # Get input data
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        # Log request
        plan_name = _plan_name(input_data)
        logger.info(f"Calculating pay for plan: {plan_name}")

        # Evaluate through engine
        result = evaluator.evaluate_from_dict(input_data)

        logger.info(f"Pay calculated successfully: {plan_name}")

        return jsonify(result), 200

    except UnsupportedPlanKind as e:
        logger.error(f"Unsupported plan kind: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "unsupported_plan_kind"
        }), 422

    except (ValueError, KeyError, TypeError, AttributeError) as e:
        # Validation errors from engine
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/validate_plan", methods=["POST"])
def validate_plan():
    """
    Validate a pay plan document and return its summary
    """
    input_data = request.get_json(force=True, silent=True)
    if not input_data:
        return jsonify({
            "error": "No input data provided",
            "status": "failed"
        }), 400

    try:
        plan = evaluator.parse_plan(input_data)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.error(f"Plan validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    return jsonify({
        "status": "valid",
        "plan_summary": evaluator.output_builder.build_plan_summary(plan),
        "fields": role_fields(plan.role, plan.plan_type)
    }), 200


def _plan_name(input_data) -> str:
    if not isinstance(input_data, dict):
        return "Unknown"
    plan = input_data.get("pay_plan")
    if not isinstance(plan, dict):
        return "Unknown"
    return plan.get("name") or "Unknown"


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
