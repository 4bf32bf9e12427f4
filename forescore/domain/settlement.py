"""Who owes who: reduce a net position to direct payments."""

from __future__ import annotations

from collections.abc import Mapping

from .primitives import NetPosition, PlayerId, Transaction


def build_transfers(net: NetPosition | Mapping[PlayerId, int]) -> list[Transaction]:
    """Greedy largest-creditor / largest-debtor matching.

    Each step clears at least one side, so ``n`` non-zero players need at
    most ``n - 1`` transfers. Ties are broken by player id.
    """
    if not isinstance(net, NetPosition):
        net = NetPosition(net)
    net.ensure_balanced(game="settlement")

    creditors = {name: amount for name, amount in net.items() if amount > 0}
    debtors = {name: -amount for name, amount in net.items() if amount < 0}

    transfers: list[Transaction] = []
    while creditors and debtors:
        creditor_name = min(creditors, key=lambda name: (-creditors[name], name))
        debtor_name = min(debtors, key=lambda name: (-debtors[name], name))

        amount = min(creditors[creditor_name], debtors[debtor_name])
        transfers.append(Transaction(payer=debtor_name, payee=creditor_name, amount=amount))

        creditors[creditor_name] -= amount
        debtors[debtor_name] -= amount
        if creditors[creditor_name] == 0:
            del creditors[creditor_name]
        if debtors[debtor_name] == 0:
            del debtors[debtor_name]

    return transfers


def replay_transfers(transfers: list[Transaction]) -> NetPosition:
    """Net effect of a list of transfers; the inverse of :func:`build_transfers`."""
    net: dict[PlayerId, int] = {}
    for transfer in transfers:
        net[transfer.payee] = net.get(transfer.payee, 0) + transfer.amount
        net[transfer.payer] = net.get(transfer.payer, 0) - transfer.amount
    return NetPosition(net)
