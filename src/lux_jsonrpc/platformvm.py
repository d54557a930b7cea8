"""Calls under the ``/ext/P`` path."""

from typing import Iterable, Optional

from . import models
from .client import JsonRpcClient
from .envelope import MapOfArraysRequest, Request, Response
from .urls import ApiFamily

UTXO_PAGE_LIMIT = 100


def prepend_0x(value: str) -> str:
    return value if value.startswith(("0x", "0X")) else "0x" + value


class PlatformClient(JsonRpcClient):
    def issue_tx(self, tx: str) -> Response[models.IssueTxResult]:
        params = {"tx": prepend_0x(tx), "encoding": "hex"}
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.issueTx", params=params),
            models.IssueTxResult.from_dict,
            "issuing a transaction",
        )

    def get_tx(self, tx_id: str) -> Response[models.GetTxResult]:
        params = {"txID": tx_id, "encoding": "json"}
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.getTx", params=params),
            models.GetTxResult.from_dict,
            f"getting tx {tx_id}",
        )

    def get_tx_status(self, tx_id: str) -> Response[models.GetTxStatusResult]:
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.getTxStatus", params={"txID": tx_id}),
            models.GetTxStatusResult.from_dict,
            f"getting tx status {tx_id}",
        )

    def get_height(self) -> Response[models.GetHeightResult]:
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.getHeight", params={}),
            models.GetHeightResult.from_dict,
            "getting height",
        )

    def get_balance(self, paddr: str) -> Response[models.GetBalanceResult]:
        return self._call(
            ApiFamily.PLATFORM,
            MapOfArraysRequest("platform.getBalance", params={"addresses": [paddr]}),
            models.GetBalanceResult.from_dict,
            f"getting balance for {paddr}",
        )

    def get_utxos(self, paddr: str) -> Response[models.GetUtxosResult]:
        params = {"addresses": [paddr], "limit": UTXO_PAGE_LIMIT, "encoding": "hex"}
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.getUTXOs", params=params),
            models.GetUtxosResult.from_dict,
            f"getting UTXOs for {paddr}",
        )

    def get_primary_network_validators(self) -> Response[models.GetCurrentValidatorsResult]:
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.getCurrentValidators", params={}),
            models.GetCurrentValidatorsResult.from_dict,
            "getting primary network validators",
        )

    def get_subnet_validators(self, subnet_id: str) -> Response[models.GetCurrentValidatorsResult]:
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.getCurrentValidators", params={"subnetID": subnet_id}),
            models.GetCurrentValidatorsResult.from_dict,
            f"getting subnet validators for {subnet_id}",
        )

    def get_subnets(self, subnet_ids: Optional[Iterable[str]] = None) -> Response[models.GetSubnetsResult]:
        # an empty list asks for every subnet
        params = {"ids": [str(subnet_id) for subnet_id in subnet_ids or []]}
        return self._call(
            ApiFamily.PLATFORM,
            MapOfArraysRequest("platform.getSubnets", params=params),
            models.GetSubnetsResult.from_dict,
            "getting subnets",
        )

    def get_blockchains(self) -> Response[models.GetBlockchainsResult]:
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.getBlockchains", params={}),
            models.GetBlockchainsResult.from_dict,
            "getting blockchains",
        )

    def get_blockchain_status(self, blockchain_id: str) -> Response[models.GetBlockchainStatusResult]:
        return self._call(
            ApiFamily.PLATFORM,
            Request("platform.getBlockchainStatus", params={"blockchainID": blockchain_id}),
            models.GetBlockchainStatusResult.from_dict,
            f"getting blockchain status for {blockchain_id}",
        )
