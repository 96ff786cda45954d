"""Chat message processing endpoint."""

from fastapi import APIRouter

from courier.api.dependencies import ToolExecutorDep
from courier.api.exceptions import from_tool_error
from courier.api.models.tools import MessageProcessRequest, MessageProcessResponse
from courier.observability.logging import get_logger
from courier.tools.directive import detect_directive
from courier.tools.errors import ToolError

logger = get_logger(__name__)

router = APIRouter(prefix="/messages")


@router.post("/process", response_model=MessageProcessResponse)
async def process_message(
    request: MessageProcessRequest,
    executor: ToolExecutorDep,
) -> MessageProcessResponse:
    """Run the tool named by an @{{Tool}} directive, if the message has one.

    Messages without a directive are returned unchanged.
    """
    tool_invoked = detect_directive(request.message) is not None

    try:
        processed = await executor.process_incoming_message(request.message)
    except ToolError as e:
        raise from_tool_error(e) from e

    return MessageProcessResponse(message=processed, tool_invoked=tool_invoked)
