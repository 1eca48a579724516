"""Reaction endpoints for the Plume API."""

from fastapi import APIRouter, status

from plume.api.v1.dependencies import ReactionLedgerDep, RequiredIdentityDep
from plume.models import Reaction
from plume.schemas.reaction import (
    MyReaction,
    ReactionCreate,
    ReactionResponse,
    ReactionStats,
)

router = APIRouter(prefix="/posts/{post_id}/reactions", tags=["reactions"])


@router.get("", response_model=list[ReactionResponse])
async def list_reactions(post_id: int, ledger: ReactionLedgerDep) -> list[Reaction]:
    """Get all reactions on a post."""
    return ledger.list_reactions(post_id)


@router.get("/stats", response_model=ReactionStats)
async def reaction_stats(post_id: int, ledger: ReactionLedgerDep) -> dict[str, int]:
    """Get per-kind reaction counts for a post."""
    return ledger.stats(post_id)


@router.get("/mine", response_model=MyReaction)
async def my_reaction(
    post_id: int,
    identity: RequiredIdentityDep,
    ledger: ReactionLedgerDep,
) -> MyReaction:
    """Get the caller's current reaction on a post."""
    return MyReaction(reaction_type=ledger.reaction_for(post_id, identity))


@router.post("", response_model=ReactionResponse, status_code=status.HTTP_201_CREATED)
async def set_reaction(
    post_id: int,
    payload: ReactionCreate,
    identity: RequiredIdentityDep,
    ledger: ReactionLedgerDep,
) -> Reaction:
    """Add or replace the caller's reaction on a post."""
    return ledger.set_reaction(post_id, identity, payload.reaction_type)


@router.delete("")
async def clear_reaction(
    post_id: int,
    identity: RequiredIdentityDep,
    ledger: ReactionLedgerDep,
) -> dict[str, str]:
    """Remove the caller's reaction from a post."""
    ledger.clear_reaction(post_id, identity)
    return {"message": "Reaction removed successfully"}
