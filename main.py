# main.py
from navgraph.app.build import build
from navgraph.domain.samples import SampleCampusGenerator


def run(grid_size: int = 4, jitter_m: float = 0.0):
    engine = build({"name": "demo", "log": {"level": "INFO"}}, use_logging=True)
    campus = SampleCampusGenerator(grid_size=grid_size, jitter_m=jitter_m).campus()
    log = engine.hooks.log

    net = engine.analyze_road_network(campus)
    log.info(
        "network",
        extra={
            "extra": {
                "roads": net.total_roads,
                "connectivity_pct": net.connectivity_pct,
                "components": net.component_count,
                "candidates": len(net.candidates),
                "isolated_landmarks": list(net.isolated_landmark_ids),
            }
        },
    )

    for building in campus.buildings:
        conn = engine.compute_connectivity(building)
        acc = engine.compute_accessibility(building)
        issues = engine.validate_building(building)
        log.info(
            "building",
            extra={
                "extra": {
                    "building": building.id,
                    "fully_connected": conn.fully_connected,
                    "connectivity_score": round(conn.score, 3),
                    "accessibility_score": round(acc.score, 3),
                    "rating": acc.rating,
                    "issues": [i.code for i in issues],
                }
            },
        )


if __name__ == "__main__":
    run()
