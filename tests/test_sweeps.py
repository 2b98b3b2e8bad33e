import asyncio

from services.realtime.sweeps import SweepRunner, run_periodic


async def test_run_periodic_survives_failing_ticks():
    calls = []

    async def action():
        calls.append(len(calls))
        if len(calls) == 1:
            raise RuntimeError("first tick fails")

    task = asyncio.create_task(run_periodic("test", action, 0.001))
    for _ in range(200):
        if len(calls) >= 3:
            break
        await asyncio.sleep(0.001)
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)

    assert len(calls) >= 3
    assert task.done()


async def test_runner_ticks_both_sweeps(server, clock, make_socket):
    stale, fresh = make_socket(), make_socket()
    stale_session = await server.connect(stale)
    fresh_session = await server.connect(fresh)
    clock.now += 301
    fresh_session.touch(clock.now)

    runner = SweepRunner(server, interval_seconds=0.001)
    runner.start()
    assert runner.running
    for _ in range(200):
        if stale_session.session_id not in server.registry and fresh.of_type("live_update"):
            break
        await asyncio.sleep(0.001)
    await runner.stop()

    assert not runner.running
    assert stale.closed
    assert server.registry.size() == 1
    assert fresh.of_type("live_update")
