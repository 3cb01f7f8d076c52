from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from staffgraph.api.deps_auth import require_user
from staffgraph.api.types import DashboardStats
from staffgraph.services.dashboard import compute_dashboard_stats


async def dashboard_stats(info: Info) -> DashboardStats:
    require_user(info)
    stats = await run_in_threadpool(compute_dashboard_stats, info.context.db)
    return DashboardStats.from_stats(stats)
