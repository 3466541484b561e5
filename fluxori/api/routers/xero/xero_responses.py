"""
Xero response helpers.

Dependencies: fastapi
System role: Xero response transformation
"""

from typing import Any

from fluxori.models.xero import SyncResult

SUCCESS_PAGE = """<!DOCTYPE html>
<html>
  <head><title>Xero connected</title></head>
  <body style="font-family: Arial, sans-serif; display: flex; justify-content: center; align-items: center; height: 100vh; margin: 0; text-align: center;">
    <div>
      <h1>Xero Connection Successful</h1>
      <p>Your Fluxori account has been connected to Xero.</p>
      <p>You can close this window and return to Fluxori.</p>
      <script>setTimeout(function () { window.close(); }, 5000);</script>
    </div>
  </body>
</html>
"""


def map_sync_result(result: dict[str, Any]) -> SyncResult:
    return SyncResult(**{key: result.get(key) for key in SyncResult.model_fields if key in result})
