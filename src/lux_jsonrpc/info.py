"""Calls under the ``/ext/info`` path."""

from typing import Iterable, Optional

from . import models
from .client import JsonRpcClient
from .envelope import MapOfArraysRequest, PositionalRequest, Request, Response
from .identity import attach_pubkey
from .urls import ApiFamily


class InfoClient(JsonRpcClient):
    def get_network_name(self) -> Response[models.GetNetworkNameResult]:
        return self._call(
            ApiFamily.INFO,
            PositionalRequest("info.getNetworkName"),
            models.GetNetworkNameResult.from_dict,
            "getting network name",
        )

    def get_network_id(self) -> Response[models.GetNetworkIdResult]:
        return self._call(
            ApiFamily.INFO,
            PositionalRequest("info.getNetworkID"),
            models.GetNetworkIdResult.from_dict,
            "getting network id",
        )

    def get_blockchain_id(self, chain_alias: str) -> Response[models.GetBlockchainIdResult]:
        return self._call(
            ApiFamily.INFO,
            Request("info.getBlockchainID", params={"alias": chain_alias}),
            models.GetBlockchainIdResult.from_dict,
            "getting blockchain id",
        )

    def get_node_id(self) -> Response[models.GetNodeIdResult]:
        """Fetch the node id and derive the BLS public key from its proof of possession."""
        response = self._call(
            ApiFamily.INFO,
            PositionalRequest("info.getNodeID"),
            models.GetNodeIdResult.from_dict,
            "getting node id",
        )
        return attach_pubkey(response)

    def get_node_version(self) -> Response[models.GetNodeVersionResult]:
        return self._call(
            ApiFamily.INFO,
            PositionalRequest("info.getNodeVersion"),
            models.GetNodeVersionResult.from_dict,
            "getting node version",
        )

    def get_vms(self) -> Response[models.GetVmsResult]:
        return self._call(ApiFamily.INFO, PositionalRequest("info.getVMs"), models.GetVmsResult.from_dict, "getting VMs")

    def is_bootstrapped(self) -> Response[models.IsBootstrappedResult]:
        return self._call(
            ApiFamily.INFO,
            PositionalRequest("info.isBootstrapped"),
            models.IsBootstrappedResult.from_dict,
            "getting bootstrapped",
        )

    def get_tx_fee(self) -> Response[models.GetTxFeeResult]:
        return self._call(
            ApiFamily.INFO,
            PositionalRequest("info.getTxFee"),
            models.GetTxFeeResult.from_dict,
            "getting tx fee",
        )

    def peers(self, node_ids: Optional[Iterable[str]] = None) -> Response[models.PeersResult]:
        # an empty list asks for every peer
        params = {"nodeIDs": [str(node_id) for node_id in node_ids or []]}
        return self._call(
            ApiFamily.INFO,
            MapOfArraysRequest("info.peers", params=params),
            models.PeersResult.from_dict,
            "getting peers",
        )
