"""Health check API routes."""

from fastapi import APIRouter

router = APIRouter(prefix="/health", tags=["health"])

# Store device instance (set by app)
_device = None


def set_device(device) -> None:
    """Set the device instance.

    Parameters
    ----------
    device
        AminoDevice instance
    """
    global _device
    _device = device


@router.get("", response_model=dict)
def health_check() -> dict:
    """Health check endpoint.

    Returns
    -------
    dict
        Health status
    """
    return {
        "status": "healthy",
        "service": "amino",
        "connected": bool(_device and _device.connected),
    }
