"""
Unit tests for SolanaTokenBalanceOracle.

Runs against a local aiohttp JSON-RPC stub, no Solana cluster needed.

Usage:
    pytest huissier/tests/unit/infrastructure
"""

from decimal import Decimal
from typing import Any, Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from huissier.domain.exceptions import BalanceLookupError
from huissier.infrastructure.blockchain.circuit_breaker import (
    CircuitBreaker,
    CircuitState,
)
from huissier.infrastructure.blockchain.solana_token_balance_oracle import (
    RPCTransportError,
    SolanaTokenBalanceOracle,
)

WALLET = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def _token_account(
    ui_amount_string: str = None,
    ui_amount: float = None,
    amount: str = "0",
    decimals: int = 6,
) -> Dict[str, Any]:
    return {
        "pubkey": "TokenAcc111111111111111111111111111111111111",
        "account": {
            "data": {
                "parsed": {
                    "info": {
                        "mint": MINT,
                        "owner": WALLET,
                        "tokenAmount": {
                            "amount": amount,
                            "decimals": decimals,
                            "uiAmount": ui_amount,
                            "uiAmountString": ui_amount_string,
                        },
                    },
                    "type": "account",
                },
                "program": "spl-token",
            },
        },
    }


def _rpc_result(accounts: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": 1,
        "result": {"context": {"slot": 1}, "value": accounts},
    }


class RPCStub:
    """Queue of canned (status, body) replies with request capture."""

    def __init__(self):
        self.replies: List[Tuple[int, Any]] = []
        self.requests: List[Dict[str, Any]] = []
        self.url = ""

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(await request.json())
        status, body = self.replies.pop(0)
        if isinstance(body, str):
            return web.Response(text=body, status=status, content_type="text/html")
        return web.json_response(body, status=status)


@pytest_asyncio.fixture
async def rpc():
    """Start local JSON-RPC stub server."""
    stub = RPCStub()
    app = web.Application()
    app.router.add_post("/", stub.handle)

    server = test_utils.TestServer(app)
    await server.start_server()
    stub.url = str(server.make_url("/"))

    yield stub

    await server.close()


@pytest_asyncio.fixture
async def oracle(rpc):
    """Oracle pointed at the stub with fast retries."""
    instance = SolanaTokenBalanceOracle(
        rpc_url=rpc.url,
        token_mint=MINT,
        commitment="finalized",
        timeout=5.0,
        max_retries=2,
        retry_delay=0,
    )

    yield instance

    await instance.close()


class TestSolanaTokenBalanceOracle:
    """Tests for balance_of against the RPC stub."""

    # ================================================================
    # Request shape
    # ================================================================

    async def test_request_filters_by_mint(self, rpc, oracle):
        """Test getTokenAccountsByOwner is called with mint filter."""
        rpc.replies.append((200, _rpc_result([])))

        await oracle.balance_of(WALLET)

        request = rpc.requests[0]
        assert request["method"] == "getTokenAccountsByOwner"
        assert request["params"][0] == WALLET
        assert request["params"][1] == {"mint": MINT}
        assert request["params"][2] == {
            "encoding": "jsonParsed",
            "commitment": "finalized",
        }

    # ================================================================
    # Balances
    # ================================================================

    async def test_no_accounts_is_zero(self, rpc, oracle):
        """Test wallet without token accounts has zero balance."""
        rpc.replies.append((200, _rpc_result([])))

        assert await oracle.balance_of(WALLET) == Decimal("0")

    async def test_multiple_accounts_are_summed(self, rpc, oracle):
        """Test every token account of the mint is counted."""
        rpc.replies.append(
            (
                200,
                _rpc_result(
                    [
                        _token_account(ui_amount_string="600.5"),
                        _token_account(ui_amount_string="499.5"),
                    ]
                ),
            )
        )

        assert await oracle.balance_of(WALLET) == Decimal("1100.0")

    async def test_raw_amount_scaled_by_decimals(self, rpc, oracle):
        """Test raw amount is used when UI amounts are absent."""
        rpc.replies.append(
            (200, _rpc_result([_token_account(amount="1234500000", decimals=6)]))
        )

        assert await oracle.balance_of(WALLET) == Decimal("1234.5")

    async def test_ui_amount_float_fallback(self, rpc, oracle):
        """Test uiAmount is used without uiAmountString."""
        rpc.replies.append((200, _rpc_result([_token_account(ui_amount=42.25)])))

        assert await oracle.balance_of(WALLET) == Decimal("42.25")

    # ================================================================
    # Failures
    # ================================================================

    async def test_rpc_error_not_retried(self, rpc, oracle):
        """Test RPC-level error fails immediately."""
        rpc.replies.append(
            (
                200,
                {
                    "jsonrpc": "2.0",
                    "id": 1,
                    "error": {"code": -32602, "message": "Invalid param"},
                },
            )
        )

        with pytest.raises(BalanceLookupError, match="Invalid param"):
            await oracle.balance_of(WALLET)

        assert len(rpc.requests) == 1

    async def test_malformed_account_rejected(self, rpc, oracle):
        """Test account without tokenAmount fails lookup."""
        rpc.replies.append((200, _rpc_result([{"account": {"data": {}}}])))

        with pytest.raises(BalanceLookupError, match="Malformed"):
            await oracle.balance_of(WALLET)

    async def test_non_json_reply_rejected(self, rpc, oracle):
        """Test an HTML page from a proxy fails lookup instead of crashing."""
        rpc.replies.append((200, "<html><body>502 Bad Gateway</body></html>"))

        with pytest.raises(BalanceLookupError, match="Malformed RPC response"):
            await oracle.balance_of(WALLET)

    async def test_null_result_is_not_zero(self, rpc, oracle):
        """Test a null result fails lookup rather than reading as zero."""
        rpc.replies.append((200, {"jsonrpc": "2.0", "id": 1, "result": None}))

        with pytest.raises(BalanceLookupError, match="Malformed RPC response"):
            await oracle.balance_of(WALLET)

    async def test_list_result_rejected(self, rpc, oracle):
        """Test a result that is not an object fails lookup."""
        rpc.replies.append((200, {"jsonrpc": "2.0", "id": 1, "result": [1]}))

        with pytest.raises(BalanceLookupError, match="Malformed RPC response"):
            await oracle.balance_of(WALLET)

    async def test_result_without_value_rejected(self, rpc, oracle):
        """Test a result missing the account list fails lookup."""
        rpc.replies.append(
            (200, {"jsonrpc": "2.0", "id": 1, "result": {"context": {"slot": 1}}})
        )

        with pytest.raises(BalanceLookupError, match="Malformed RPC response"):
            await oracle.balance_of(WALLET)

    async def test_non_object_token_amount_rejected(self, rpc, oracle):
        """Test a scalar tokenAmount fails lookup."""
        account = _token_account(ui_amount_string="1")
        account["account"]["data"]["parsed"]["info"]["tokenAmount"] = "1"
        rpc.replies.append((200, _rpc_result([account])))

        with pytest.raises(BalanceLookupError, match="Malformed token account"):
            await oracle.balance_of(WALLET)

    async def test_http_error_retried(self, rpc, oracle):
        """Test transient HTTP failure is retried."""
        rpc.replies.append((503, {"error": "overloaded"}))
        rpc.replies.append(
            (200, _rpc_result([_token_account(ui_amount_string="7")]))
        )

        assert await oracle.balance_of(WALLET) == Decimal("7")
        assert len(rpc.requests) == 2

    async def test_retries_exhausted(self, rpc, oracle):
        """Test persistent HTTP failure becomes BalanceLookupError."""
        rpc.replies.extend([(503, {}), (503, {})])

        with pytest.raises(BalanceLookupError, match="unavailable"):
            await oracle.balance_of(WALLET)

        assert len(rpc.requests) == 2

    async def test_circuit_opens_on_repeated_outage(self, rpc):
        """Test open circuit rejects lookups without calling RPC."""
        breaker = CircuitBreaker(
            name="solana_rpc",
            failure_threshold=1,
            recovery_timeout=60,
            expected_exceptions=(RPCTransportError,),
        )
        oracle = SolanaTokenBalanceOracle(
            rpc_url=rpc.url,
            token_mint=MINT,
            max_retries=1,
            retry_delay=0,
            circuit_breaker=breaker,
        )
        rpc.replies.append((503, {}))

        try:
            with pytest.raises(BalanceLookupError):
                await oracle.balance_of(WALLET)
            assert breaker.state == CircuitState.OPEN

            with pytest.raises(BalanceLookupError, match="OPEN"):
                await oracle.balance_of(WALLET)
        finally:
            await oracle.close()

        assert len(rpc.requests) == 1

    async def test_rpc_error_does_not_trip_circuit(self, rpc, oracle):
        """Test RPC-level errors are not counted as outages."""
        rpc.replies.append(
            (200, {"jsonrpc": "2.0", "id": 1, "error": {"message": "bad"}})
        )

        with pytest.raises(BalanceLookupError):
            await oracle.balance_of(WALLET)

        assert oracle.circuit_breaker.failure_count == 0
