import logging

from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("unhandled error in %s", context.get('view').__class__.__name__, exc_info=exc)
        return Response({'success': False, 'message': 'Internal server error'}, status=500)
    # normalize response
    body = {'success': False}
    if isinstance(exc, exceptions.ValidationError):
        body['message'] = 'Invalid request'
        body['errors'] = resp.data
    elif isinstance(resp.data, dict):
        body['message'] = resp.data.get('detail') or resp.data
    else:
        body['message'] = str(resp.data)
    return Response(body, status=resp.status_code)
