"""AWS Lambda entry point.

Set the function handler to `muxbridge.lambda_handler.handler`. The payload
shape (REST API v1 or HTTP API v2) comes from EVENT_FORMAT.
"""

from muxbridge.main import create_lambda_handler

handler = create_lambda_handler()
