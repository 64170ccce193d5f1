import asyncio
import random

from taskrunner import Dispatcher, Task


class Collect(Task):
    """Pretend to fetch rows from a source."""

    def __init__(self, dispatcher, options=None):
        super().__init__(dispatcher, options, {"source": "db", "limit": 100})

    async def run(self):
        await asyncio.sleep(random.uniform(0.01, 0.05))
        rows = random.randint(1, self.options["limit"])
        print(f"{self.id}: collected {rows} rows from {self.options['source']}")
        return self.stats({"rows": rows})


class Analyze(Task):
    async def run(self, *metrics):
        await asyncio.sleep(0.01)
        print(f"{self.id}: analyzed {', '.join(metrics)}")
        return self.stats({"metrics": list(metrics)})


class Report(Task):
    """Runs its own sub map through the owning dispatcher."""

    async def run(self, title):
        sections = await self.dispatcher.run(
            {
                "summary": {"type": "analyze", "id": "summary", "args": ["mean", "median"]},
                "trends": {"type": "analyze", "id": "trends", "args": "slope"},
            }
        )
        print(f"{self.id}: report {title!r} with {len(sections)} sections")
        return self.stats({"title": title, "sections": sections})


def main() -> None:
    dispatcher = Dispatcher(strict=False, notify=lambda err: print(f"!! {err.kind}: {err}"))
    dispatcher.register("collect", Collect)
    dispatcher.register("analyze", Analyze)
    dispatcher.register("report", Report)

    stats = dispatcher.run_sync(
        [
            # Collect from both sources concurrently
            {
                "orders": {"type": "collect", "id": "orders", "options": {"source": "orders"}},
                "users": {"type": "collect", "id": "users", "options": {"source": "users", "limit": 10}},
            },
            # Then build the report
            {"type": "report", "id": "weekly", "args": "Weekly numbers"},
            # Unknown types are reported and yield None in non strict mode
            {"type": "publish"},
        ]
    )

    collected, report, published = stats
    print(f"Rows: {sum(s['rows'] for s in collected.values())}")
    print(f"Report took {report['time']:.3f}s, publish result: {published}")


if __name__ == "__main__":
    main()
