import json
import zipfile

import pytest

from route_matching.analyze_matching import load_exported_routes, intra_route_similarities, inter_route_similarities, \
    leave_one_out_ranking, summarize, main
from route_matching.config import MatchingOptions

ZIGZAG = [(0.3, 0.1), (0.6, 0.3), (0.4, 0.5), (0.7, 0.7), (0.5, 0.9)]
# same holds, photo taken a bit closer and further left
ZIGZAG_OTHER_ANGLE = [(0.22, 0.08), (0.58, 0.31), (0.35, 0.52), (0.72, 0.73), (0.47, 0.95)]
DIAGONAL = [(0.1, 0.1), (0.3, 0.3), (0.5, 0.5), (0.7, 0.7)]


def raw_doc(route_id, name, *point_lists):
    """route the way the browser app exported it, without normalized points"""
    return {
        "id": route_id,
        "name": name,
        "createdAt": "2025-11-29T10:00:00.000Z",
        "images": [
            {"id": f"{route_id}-{n}", "filename": f"{route_id}-{n}.jpg",
             "points": [{"x": x, "y": y} for x, y in pts]}
            for n, pts in enumerate(point_lists)
        ],
    }


@pytest.fixture
def dataset(tmp_path):
    data = {"routes": [
        raw_doc("zig", "Zigzag", ZIGZAG, ZIGZAG_OTHER_ANGLE),
        raw_doc("diag", "Diagonal", DIAGONAL),
    ]}
    path = tmp_path / "routes.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_from_json_computes_normalized_points(dataset):
    routes = load_exported_routes(dataset)

    assert [r.name for r in routes] == ["Zigzag", "Diagonal"]
    assert all(len(img.normalized_points) == len(img.points) for r in routes for img in r.images)


def test_load_from_zip(dataset, tmp_path):
    zip_path = tmp_path / "export.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.write(dataset, "routes.json")

    assert len(load_exported_routes(zip_path)) == 2


def test_load_rejects_other_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(RuntimeError):
        load_exported_routes(path)


def test_report_tables(dataset):
    routes = load_exported_routes(dataset)
    options = MatchingOptions()

    intra = intra_route_similarities(routes, options)
    inter = inter_route_similarities(routes, options)
    ranking = leave_one_out_ranking(routes, options)

    assert len(intra) == 1
    assert len(inter) == 1
    assert list(ranking["rank"]) == [1, 1]
    assert intra["similarity"].iloc[0] > inter["similarity"].iloc[0]

    summary = summarize(intra, inter, ranking)
    assert summary["top1_rate"] == 1.0
    assert summary["gap"] > 0


def test_main_prints_report(dataset, capsys):
    summary = main(["--dataset", str(dataset), "--max-distance", "0.8"])

    out = capsys.readouterr().out
    assert "Leave-one-out search" in out
    assert "Zigzag" in out
    assert summary["top1_rate"] == 1.0
