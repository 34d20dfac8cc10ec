import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from roadchase.application.commands import (
    SetThrottleCommand, ChangeLaneCommand, PitStopReachedCommand,
    ContinueFromPitStopCommand, TrafficCollisionCommand, CollectPickupCommand
)
from roadchase.domain.models import (
    RunState, PursuitStatus, EconomyStatus, ThrottleInput, LaneInput,
    UpgradeRequest, PurchaseResult
)
from roadchase.kernel.simulation_kernel import SimulationKernel
from roadchase.kernel.snapshot_builder import SnapshotBuilder

logger = logging.getLogger(__name__)


async def run_simulation(kernel: SimulationKernel):
    """Runs the simulation update loop at the kernel's tick rate"""
    dt = kernel.dt

    while True:
        start_time = time.time()

        kernel.run_tick()

        elapsed = time.time() - start_time
        sleep_time = max(0.0, dt - elapsed)
        await asyncio.sleep(sleep_time)


def create_app(kernel: Optional[SimulationKernel] = None, run_loop: bool = True) -> FastAPI:
    kernel = kernel or SimulationKernel()
    if not kernel.initialized:
        kernel.initialize()
    snapshots = SnapshotBuilder()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        loop_task = asyncio.create_task(run_simulation(kernel)) if run_loop else None
        yield
        if loop_task is not None:
            loop_task.cancel()

    app = FastAPI(lifespan=lifespan)
    app.state.kernel = kernel

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/run/state", response_model=RunState)
    async def get_run_state():
        """Returns the full state of the current run"""
        return kernel.get_state()

    @app.get("/api/run/snapshot")
    async def get_snapshot():
        """Returns a compact frame for renderers"""
        return snapshots.build(kernel.state, kernel.last_spawns)

    @app.post("/api/run/restart", response_model=RunState)
    async def restart_run(seed: Optional[int] = None):
        """Starts a fresh run; upgrades and coins reset"""
        kernel.initialize(seed if seed is not None else kernel.seed)
        return kernel.get_state()

    @app.get("/api/pursuit", response_model=PursuitStatus)
    async def get_pursuit():
        """Heat, chase phase and bust progress"""
        return kernel.pursuit.status()

    @app.post("/api/player/throttle")
    async def set_throttle(body: ThrottleInput):
        if body.throttle not in (-1, 0, 1):
            raise HTTPException(status_code=400, detail="Throttle must be -1, 0 or 1")
        kernel.queue_command(SetThrottleCommand(body.throttle))
        return {"status": "queued", "throttle": body.throttle}

    @app.post("/api/player/lane")
    async def change_lane(body: LaneInput):
        if body.direction not in (-1, 1):
            raise HTTPException(status_code=400, detail="Direction must be -1 or 1")
        kernel.queue_command(ChangeLaneCommand(body.direction))
        return {"status": "queued", "direction": body.direction}

    @app.post("/api/collisions/traffic")
    async def report_collision(entity_id: Optional[str] = None):
        """Reports a player/traffic collision resolved by the physics layer"""
        kernel.queue_command(TrafficCollisionCommand(entity_id))
        return {"status": "queued"}

    @app.post("/api/pickups/{pickup_id}/collect")
    async def collect_pickup(pickup_id: str):
        if not any(p.id == pickup_id for p in kernel.state.pickups):
            raise HTTPException(status_code=404, detail="Pickup not found")
        kernel.queue_command(CollectPickupCommand(pickup_id))
        return {"status": "queued", "pickupId": pickup_id}

    @app.post("/api/pitstop/reached")
    async def pit_stop_reached():
        kernel.queue_command(PitStopReachedCommand())
        return {"status": "queued"}

    @app.post("/api/pitstop/continue")
    async def pit_stop_continue():
        kernel.queue_command(ContinueFromPitStopCommand())
        return {"status": "queued"}

    @app.get("/api/shop", response_model=EconomyStatus)
    async def get_shop():
        return kernel.ledger.status()

    @app.post("/api/shop/purchase", response_model=PurchaseResult)
    async def purchase_upgrade(body: UpgradeRequest):
        if not kernel.state.shop_open:
            raise HTTPException(status_code=409, detail="Shop is only open at a pit stop")
        # The world is frozen while the shop is open, so purchases apply directly
        cost = kernel.ledger.cost(body.upgrade)
        if cost is None:
            raise HTTPException(status_code=400, detail="Upgrade already at max level")
        if not kernel.purchase_upgrade(body.upgrade):
            raise HTTPException(status_code=400, detail="Not enough coins")
        return {"upgrade": body.upgrade, "cost": cost, "status": "purchased"}

    @app.get("/")
    def read_root():
        return {"status": "Roadchase simulation running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8001)
