"""Deploy command - match the branch and provision its preview tree."""

from __future__ import annotations

from argparse import Namespace
import logging

from branchpreview.app import PreviewApp
from branchpreview.commands.output import emit_output, error_payload
from branchpreview.core.models import DeployRequest
from branchpreview.errors import BranchPreviewError, ValidationError, exit_code_for_exception

logger = logging.getLogger(__name__)


def request_from_args(args: Namespace) -> DeployRequest:
    return DeployRequest(
        ref_slug=args.refslug,
        repo_url=args.repourl,
        commit_sha=args.commitsha,
        project_name=args.projectname,
    )


def run_deploy(
    args: Namespace,
    *,
    app: PreviewApp | None = None,
    output_sink=print,
) -> int:
    """Provision or rebuild the preview deployment for one branch."""
    if app is None:
        raise ValidationError("app is required; construct it in the CLI composition root")
    json_output = getattr(args, "json", False)
    request = request_from_args(args)

    try:
        outcome = app.deploy(request)
    except BranchPreviewError as exc:
        logger.error("Error: %s", exc)
        emit_output(
            command="deploy",
            payload=error_payload(exc, refslug=request.ref_slug, projectname=request.project_name),
            json_output=json_output,
            output_sink=output_sink,
            human_lines=(f"deploy: error={exc}",),
        )
        return exit_code_for_exception(exc)

    payload = {"status": "OK", "dry_run": app.dry_run, **outcome.to_payload()}
    human_lines = [
        f"deploy: refslug={request.ref_slug} project={request.project_name}",
        f"deploy: path={outcome.path.value} target={outcome.target}",
    ]
    if outcome.match.matched:
        human_lines.append(
            f"deploy: matched={outcome.match.matched_directory} "
            f"fingerprint={outcome.match.host_fingerprint}"
        )
    human_lines.append(f"deploy: commands={len(outcome.commands)} created={len(outcome.created)}")
    emit_output(
        command="deploy",
        payload=payload,
        json_output=json_output,
        output_sink=output_sink,
        human_lines=human_lines,
    )
    return 0
