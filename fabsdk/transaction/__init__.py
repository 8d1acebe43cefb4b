# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Proposal builders.

`proposal_builder.ProposalBuilder` assembles the generic proposal envelope;
`install_proposal_builder.InstallProposalBuilder` prepares the lifecycle
`install` invocation (source resolution, packaging, deployment descriptor)
on top of it.
"""

from __future__ import annotations

__all__ = [
	"install_proposal_builder",
	"proposal_builder",
	"proto_utils",
	"source_layout",
]
