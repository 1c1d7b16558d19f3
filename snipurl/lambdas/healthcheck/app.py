from datetime import datetime, UTC

from snipurl.types import LambdaEvent, LambdaContext, LambdaResponse
from snipurl.utils.responses import response_200


def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle GET /api/health: liveness probe, touches no backend."""
    timestamp = datetime.now(UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
    return response_200({'status': 'ok', 'timestamp': timestamp})
