"""Device statistics and control API routes.

Routes are plain functions so FastAPI runs them on its worker threads; the
AminoDevice lock serializes them against the single session.
"""

from fastapi import APIRouter, HTTPException

from lib.amino.api.models import ControlResponse, DeviceStatusResponse
from lib.amino.exceptions import (
    AminoError,
    AuthenticationError,
    CommandError,
    ConnectionError,
    TimeoutError,
)
from lib.amino.logging import log_error
from lib.amino.models import ControlRequest

router = APIRouter(prefix="/device", tags=["device"])

# Store device instance (set by app)
_device = None

_STATUS_CODES: dict[type[AminoError], int] = {
    AuthenticationError: 401,
    CommandError: 502,
    ConnectionError: 503,
    TimeoutError: 504,
}


def set_device(device) -> None:
    """Set the device instance.

    Parameters
    ----------
    device
        AminoDevice instance
    """
    global _device
    _device = device


def _require_device():
    if not _device:
        raise HTTPException(status_code=503, detail="Device not available")
    return _device


def _http_error(error: AminoError) -> HTTPException:
    log_error(f"Request failed: {error}", device_ip=error.device_ip)
    status_code = _STATUS_CODES.get(type(error), 400)
    return HTTPException(status_code=status_code, detail=str(error))


@router.get("/status", response_model=DeviceStatusResponse)
def get_status() -> DeviceStatusResponse:
    """Get device connection status.

    Returns
    -------
    DeviceStatusResponse
        Device status
    """
    device = _require_device()
    return DeviceStatusResponse(
        host=device.host,
        port=device.port,
        connected=device.connected,
        state=device.session.state.value,
    )


@router.get("/statistics")
def get_statistics() -> dict:
    """Poll the device, connecting first if needed.

    Returns
    -------
    dict
        Snapshot keyed by exposed statistic names
    """
    device = _require_device()
    try:
        snapshot = device.get_statistics(connect=True)
    except AminoError as e:
        raise _http_error(e) from e

    return snapshot.model_dump(mode="json", by_alias=True)


@router.post("/control", response_model=ControlResponse)
def control(request: ControlRequest | list[ControlRequest]) -> ControlResponse:
    """Apply one control request or a list of them in order.

    Unknown control names are reported as ignored and never touch the device.

    Parameters
    ----------
    request : ControlRequest | list[ControlRequest]
        Control request(s)

    Returns
    -------
    ControlResponse
        Applied and ignored controls
    """
    device = _require_device()
    requests = request if isinstance(request, list) else [request]
    try:
        applied, ignored = device.apply_controls(requests)
    except AminoError as e:
        raise _http_error(e) from e

    return ControlResponse(
        host=device.host,
        controls=applied,
        ignored=ignored,
        success=True,
    )


@router.post("/disconnect", response_model=dict)
def disconnect() -> dict:
    """Close the device session.

    Returns
    -------
    dict
        Disconnection result
    """
    device = _require_device()
    device.disconnect()
    return {"host": device.host, "status": "disconnected", "success": True}
