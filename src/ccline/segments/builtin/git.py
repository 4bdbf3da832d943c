"""Git branch and status segment."""

from typing import Optional

from ...config.options import GitSegmentConfig, GitStatusFormat
from ...config.schema import SegmentId
from ...types import InputData, SegmentData
from ...utils.git import GitInfo, GitRunner, GitStatus, GitStatusCounts, get_git_info, run_git
from ..base import Segment
from ..registry import register_segment

# (clean, dirty without counts, conflicts) per status format
_STATUS_WORDS = {
    GitStatusFormat.SYMBOLS: ("✓", "●", "⚠"),
    GitStatusFormat.TEXT: ("clean", "dirty", "conflicts"),
    GitStatusFormat.COUNT: ("clean", "dirty", "conflicts"),
}


def format_branch_name(branch: str, max_length: int) -> str:
    """Truncate a branch name to max_length, ending in ``...``."""
    if len(branch) <= max_length:
        return branch
    return branch[: max(max_length - 3, 0)] + "..."


def format_status(
    status: GitStatus,
    counts: GitStatusCounts,
    status_format: GitStatusFormat,
    hide_clean: bool = False,
) -> str:
    if status == GitStatus.CLEAN and hide_clean:
        return ""

    clean, dirty, conflicts = _STATUS_WORDS[status_format]
    if status == GitStatus.CLEAN:
        return clean
    if status == GitStatus.CONFLICTS:
        return conflicts

    if status_format == GitStatusFormat.COUNT:
        return f"({counts.total} changes)" if counts.total > 0 else dirty

    if status_format == GitStatusFormat.SYMBOLS:
        labels = ("+", "~", "-")
    else:
        labels = ("added:", "modified:", "deleted:")

    parts = [
        f"{label}{count}"
        for label, count in zip(labels, (counts.added, counts.modified, counts.deleted))
        if count > 0
    ]
    return " ".join(parts) if parts else dirty


@register_segment(
    SegmentId.GIT,
    display_name="Git",
    description="Branch, working tree status and upstream tracking",
)
class GitSegment(Segment):
    """Display the current branch with status, tracking, SHA, tag and stash."""

    def __init__(self, options=None, runner: GitRunner = run_git):
        super().__init__(options)
        self.config = GitSegmentConfig.from_options(self.options)
        self.runner = runner

    def _secondary(self, info: GitInfo) -> str:
        config = self.config
        parts = []

        status = format_status(
            info.status, info.status_counts, config.status_format, config.hide_clean_status
        )
        if status:
            parts.append(status)

        if config.show_remote:
            if info.ahead > 0:
                parts.append(f"↑{info.ahead}")
            if info.behind > 0:
                parts.append(f"↓{info.behind}")

        if info.sha:
            parts.append(f"@{info.sha}")
        if info.tag:
            parts.append(f"[{info.tag}]")
        if info.stash_count is not None:
            parts.append(f"{{{info.stash_count}}}")

        return " ".join(parts)

    def collect(self, input_data: InputData) -> Optional[SegmentData]:
        info = get_git_info(
            input_data.workspace.current_dir,
            runner=self.runner,
            sha_length=self.config.sha_length if self.config.show_sha else None,
            include_stash=self.config.show_stash,
            include_tag=self.config.show_tag,
        )
        if info is None:
            return None

        metadata = {
            "branch": info.branch,
            "status": info.status.value,
            "ahead": str(info.ahead),
            "behind": str(info.behind),
            "added": str(info.status_counts.added),
            "modified": str(info.status_counts.modified),
            "deleted": str(info.status_counts.deleted),
        }
        if info.sha:
            metadata["sha"] = info.sha
        if info.stash_count is not None:
            metadata["stash_count"] = str(info.stash_count)
        if info.tag:
            metadata["tag"] = info.tag

        return SegmentData(
            primary=format_branch_name(info.branch, self.config.branch_max_length),
            secondary=self._secondary(info),
            metadata=metadata,
        )
