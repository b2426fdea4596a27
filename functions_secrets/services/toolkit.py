"""Bridge to the Chainlink Functions toolkit (@chainlink/functions-toolkit)"""
import asyncio
import json
import logging
import os
from typing import Any, Dict, Optional

from functions_secrets.errors import ToolkitError
from functions_secrets.signer import Signer

logger = logging.getLogger(__name__)

# Environment variable carrying the signing key into the node process
SIGNER_KEY_ENV = "FUNCTIONS_SIGNER_KEY"

# Marks the response line on stdout; anything else the toolkit prints is ignored
RESPONSE_PREFIX = "@@functions-toolkit-response@@"

# Reads one JSON request from stdin, calls a SecretsManager method and
# writes RESPONSE_PREFIX + {"ok": ..., "result"|"error": ...} on its own line.
BRIDGE_SCRIPT = r"""
const { SecretsManager } = require('@chainlink/functions-toolkit');
const ethers = require('ethers');

const respond = (body) => process.stdout.write('\n@@functions-toolkit-response@@' + JSON.stringify(body) + '\n');

let input = '';
process.stdin.setEncoding('utf8');
process.stdin.on('data', (chunk) => { input += chunk; });
process.stdin.on('end', async () => {
    try {
        const request = JSON.parse(input);
        const provider = new ethers.providers.JsonRpcProvider(request.rpcUrl);
        const signer = new ethers.Wallet(process.env.FUNCTIONS_SIGNER_KEY, provider);
        const secretsManager = new SecretsManager({
            signer: signer,
            functionsRouterAddress: request.functionsRouterAddress,
            donId: request.donId
        });
        await secretsManager.initialize();
        const result = await secretsManager[request.method](request.params);
        respond({ ok: true, result: result });
    } catch (error) {
        respond({ ok: false, error: error && error.message ? error.message : String(error) });
        process.exitCode = 1;
    }
});
"""

def parse_response(output: str) -> Optional[Dict[str, Any]]:
    """Last prefixed JSON line in the bridge output, if any"""
    for line in reversed(output.splitlines()):
        if line.startswith(RESPONSE_PREFIX):
            try:
                return json.loads(line[len(RESPONSE_PREFIX):])
            except json.JSONDecodeError:
                return None
    return None

class FunctionsToolkit:
    """Runs SecretsManager methods of the Functions toolkit in a node process"""

    def __init__(self, node_binary: str = "node", node_path: Optional[str] = None):
        self.node_binary = node_binary
        self.node_path = node_path

    def _build_env(self, signer: Signer) -> Dict[str, str]:
        env = dict(os.environ)
        env[SIGNER_KEY_ENV] = signer.private_key
        if self.node_path:
            env["NODE_PATH"] = self.node_path
        return env

    async def call(self, signer: Signer, functions_router_address: str, don_id: str,
                   method: str, params: Dict[str, Any]) -> Any:
        """
        Call a toolkit SecretsManager method and return its result.

        Raises:
            ToolkitError: If node cannot be started or the toolkit call fails
        """
        request = {
            "rpcUrl": signer.rpc_url,
            "functionsRouterAddress": functions_router_address,
            "donId": don_id,
            "method": method,
            "params": params,
        }

        try:
            process = await asyncio.create_subprocess_exec(
                self.node_binary, "-e", BRIDGE_SCRIPT,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._build_env(signer)
            )
        except OSError as e:
            raise ToolkitError(f"Unable to start {self.node_binary}: {e}", method=method)

        stdout, stderr = await process.communicate(json.dumps(request).encode())

        response = parse_response(stdout.decode(errors="replace"))

        if not isinstance(response, dict):
            raise ToolkitError(
                f"Functions toolkit exited with status {process.returncode}",
                method=method,
                details={"stderr": stderr.decode(errors="replace").strip()}
            )

        if not response.get("ok"):
            raise ToolkitError(response.get("error") or "unknown toolkit error", method=method)

        logger.debug(f"Functions toolkit {method} completed")
        return response.get("result")
