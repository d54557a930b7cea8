from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def _int(value: Any) -> int:
    # the node encodes 64-bit quantities as JSON strings
    return int(value)


def _opt_int(doc: Mapping[str, Any], key: str) -> Optional[int]:
    value = doc.get(key)
    return None if value is None else int(value)


@dataclass(frozen=True)
class BlsPublicKey:
    compressed: bytes
    x: int
    y: int

    def hex(self) -> str:
        return "0x" + self.compressed.hex()


@dataclass(frozen=True)
class ProofOfPossession:
    public_key: str
    proof_of_possession: str
    pubkey: Optional[BlsPublicKey] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "ProofOfPossession":
        return cls(public_key=str(doc["publicKey"]), proof_of_possession=str(doc["proofOfPossession"]))


# info.*


@dataclass(frozen=True)
class GetNetworkNameResult:
    network_name: str

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetNetworkNameResult":
        return cls(network_name=str(doc["networkName"]))


@dataclass(frozen=True)
class GetNetworkIdResult:
    network_id: int

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetNetworkIdResult":
        return cls(network_id=_int(doc["networkID"]))


@dataclass(frozen=True)
class GetBlockchainIdResult:
    blockchain_id: str

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetBlockchainIdResult":
        return cls(blockchain_id=str(doc["blockchainID"]))


@dataclass(frozen=True)
class GetNodeIdResult:
    node_id: str
    node_pop: Optional[ProofOfPossession] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetNodeIdResult":
        pop = doc.get("nodePOP")
        return cls(node_id=str(doc["nodeID"]), node_pop=None if pop is None else ProofOfPossession.from_dict(pop))


@dataclass(frozen=True)
class GetNodeVersionResult:
    version: str
    database_version: Optional[str] = None
    git_commit: Optional[str] = None
    vm_versions: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetNodeVersionResult":
        return cls(
            version=str(doc["version"]),
            database_version=doc.get("databaseVersion"),
            git_commit=doc.get("gitCommit"),
            vm_versions=dict(doc.get("vmVersions") or {}),
        )


@dataclass(frozen=True)
class GetVmsResult:
    vms: Dict[str, List[str]]

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetVmsResult":
        return cls(vms={vm_id: list(aliases) for vm_id, aliases in doc["vms"].items()})


@dataclass(frozen=True)
class IsBootstrappedResult:
    is_bootstrapped: bool

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "IsBootstrappedResult":
        return cls(is_bootstrapped=bool(doc["isBootstrapped"]))


@dataclass(frozen=True)
class GetTxFeeResult:
    tx_fee: int
    create_asset_tx_fee: Optional[int] = None
    create_subnet_tx_fee: Optional[int] = None
    create_blockchain_tx_fee: Optional[int] = None
    add_primary_network_validator_fee: Optional[int] = None
    add_primary_network_delegator_fee: Optional[int] = None
    add_subnet_validator_fee: Optional[int] = None
    add_subnet_delegator_fee: Optional[int] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetTxFeeResult":
        return cls(
            tx_fee=_int(doc["txFee"]),
            create_asset_tx_fee=_opt_int(doc, "createAssetTxFee"),
            create_subnet_tx_fee=_opt_int(doc, "createSubnetTxFee"),
            create_blockchain_tx_fee=_opt_int(doc, "createBlockchainTxFee"),
            add_primary_network_validator_fee=_opt_int(doc, "addPrimaryNetworkValidatorFee"),
            add_primary_network_delegator_fee=_opt_int(doc, "addPrimaryNetworkDelegatorFee"),
            add_subnet_validator_fee=_opt_int(doc, "addSubnetValidatorFee"),
            add_subnet_delegator_fee=_opt_int(doc, "addSubnetDelegatorFee"),
        )


@dataclass(frozen=True)
class Peer:
    ip: str
    node_id: str
    public_ip: Optional[str] = None
    version: Optional[str] = None
    last_sent: Optional[str] = None
    last_received: Optional[str] = None
    observed_uptime: Optional[int] = None
    tracked_subnets: List[str] = field(default_factory=list)
    benched: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "Peer":
        return cls(
            ip=str(doc["ip"]),
            node_id=str(doc["nodeID"]),
            public_ip=doc.get("publicIP"),
            version=doc.get("version"),
            last_sent=doc.get("lastSent"),
            last_received=doc.get("lastReceived"),
            observed_uptime=_opt_int(doc, "observedUptime"),
            tracked_subnets=list(doc.get("trackedSubnets") or []),
            benched=list(doc.get("benched") or []),
        )


@dataclass(frozen=True)
class PeersResult:
    num_peers: int
    peers: List[Peer] = field(default_factory=list)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "PeersResult":
        return cls(num_peers=_int(doc["numPeers"]), peers=[Peer.from_dict(p) for p in doc.get("peers") or []])


# platform.*


@dataclass(frozen=True)
class IssueTxResult:
    tx_id: str

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "IssueTxResult":
        return cls(tx_id=str(doc["txID"]))


@dataclass(frozen=True)
class GetTxResult:
    tx: Any
    encoding: str

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetTxResult":
        return cls(tx=doc["tx"], encoding=str(doc["encoding"]))


@dataclass(frozen=True)
class GetTxStatusResult:
    status: str
    reason: Optional[str] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetTxStatusResult":
        return cls(status=str(doc["status"]), reason=doc.get("reason"))


@dataclass(frozen=True)
class GetHeightResult:
    height: int

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetHeightResult":
        return cls(height=_int(doc["height"]))


@dataclass(frozen=True)
class UtxoId:
    tx_id: str
    output_index: int

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "UtxoId":
        return cls(tx_id=str(doc["txID"]), output_index=_int(doc["outputIndex"]))


@dataclass(frozen=True)
class GetBalanceResult:
    balance: int
    unlocked: Optional[int] = None
    locked_stakeable: Optional[int] = None
    locked_not_stakeable: Optional[int] = None
    utxo_ids: List[UtxoId] = field(default_factory=list)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetBalanceResult":
        return cls(
            balance=_int(doc["balance"]),
            unlocked=_opt_int(doc, "unlocked"),
            locked_stakeable=_opt_int(doc, "lockedStakeable"),
            locked_not_stakeable=_opt_int(doc, "lockedNotStakeable"),
            utxo_ids=[UtxoId.from_dict(u) for u in doc.get("utxoIDs") or []],
        )


@dataclass(frozen=True)
class EndIndex:
    address: str
    utxo: str


@dataclass(frozen=True)
class GetUtxosResult:
    num_fetched: int
    utxos: List[str]
    end_index: Optional[EndIndex] = None
    encoding: Optional[str] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetUtxosResult":
        end = doc.get("endIndex")
        return cls(
            num_fetched=_int(doc["numFetched"]),
            utxos=list(doc.get("utxos") or []),
            end_index=None if end is None else EndIndex(address=str(end["address"]), utxo=str(end["utxo"])),
            encoding=doc.get("encoding"),
        )


@dataclass(frozen=True)
class Validator:
    tx_id: str
    node_id: str
    start_time: int
    end_time: int
    weight: Optional[int] = None
    stake_amount: Optional[int] = None
    potential_reward: Optional[int] = None
    delegation_fee: Optional[str] = None
    uptime: Optional[str] = None
    connected: Optional[bool] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "Validator":
        return cls(
            tx_id=str(doc["txID"]),
            node_id=str(doc["nodeID"]),
            start_time=_int(doc["startTime"]),
            end_time=_int(doc["endTime"]),
            weight=_opt_int(doc, "weight"),
            stake_amount=_opt_int(doc, "stakeAmount"),
            potential_reward=_opt_int(doc, "potentialReward"),
            delegation_fee=doc.get("delegationFee"),
            uptime=doc.get("uptime"),
            connected=doc.get("connected"),
        )


@dataclass(frozen=True)
class GetCurrentValidatorsResult:
    validators: List[Validator]

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetCurrentValidatorsResult":
        return cls(validators=[Validator.from_dict(v) for v in doc["validators"]])


@dataclass(frozen=True)
class Subnet:
    id: str
    control_keys: List[str]
    threshold: int

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "Subnet":
        return cls(id=str(doc["id"]), control_keys=list(doc.get("controlKeys") or []), threshold=_int(doc["threshold"]))


@dataclass(frozen=True)
class GetSubnetsResult:
    subnets: List[Subnet]

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetSubnetsResult":
        return cls(subnets=[Subnet.from_dict(s) for s in doc["subnets"]])


@dataclass(frozen=True)
class Blockchain:
    id: str
    name: str
    subnet_id: str
    vm_id: str

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "Blockchain":
        return cls(id=str(doc["id"]), name=str(doc["name"]), subnet_id=str(doc["subnetID"]), vm_id=str(doc["vmID"]))


@dataclass(frozen=True)
class GetBlockchainsResult:
    blockchains: List[Blockchain]

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetBlockchainsResult":
        return cls(blockchains=[Blockchain.from_dict(b) for b in doc["blockchains"]])


@dataclass(frozen=True)
class GetBlockchainStatusResult:
    status: str

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "GetBlockchainStatusResult":
        return cls(status=str(doc["status"]))


# health (plain JSON, no envelope)


@dataclass(frozen=True)
class HealthCheck:
    message: Any = None
    error: Optional[str] = None
    timestamp: Optional[str] = None
    duration: Optional[int] = None
    contiguous_failures: int = 0
    time_of_first_failure: Optional[str] = None

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "HealthCheck":
        error = doc.get("error")
        if isinstance(error, Mapping):
            error = error.get("message")
        return cls(
            message=doc.get("message"),
            error=error,
            timestamp=doc.get("timestamp"),
            duration=_opt_int(doc, "duration"),
            contiguous_failures=int(doc.get("contiguousFailures") or 0),
            time_of_first_failure=doc.get("timeOfFirstFailure"),
        )


@dataclass(frozen=True)
class HealthResult:
    healthy: bool
    checks: Dict[str, HealthCheck] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "HealthResult":
        checks = doc.get("checks") or {}
        return cls(healthy=bool(doc["healthy"]), checks={name: HealthCheck.from_dict(c) for name, c in checks.items()})
