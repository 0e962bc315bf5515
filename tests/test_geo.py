from refdata.config import BuildConfig
from refdata.io import file_sha1
from refdata.stages.geo import runner
from refdata.stages.geo.compile import compile_geo, to_document
from refdata.stages.geo.parse import read_rows
from refdata.stages.geo.render import quote, render_module

EXPECTED_TS = """// Auto-generated from public/tw_cities_districts.csv
export const TAIWAN_CITIES = [
  { code: 'c1', label: '台北市', regions: [
    { code: 'c1-r1', label: '中正區' },
    { code: 'c1-r2', label: '大安區' },
  ] },
  { code: 'c2', label: '新北市', regions: [
    { code: 'c2-r1', label: '板橋區' },
  ] },
] as const;
export const CITY_DICTIONARY = {
  'c1': '台北市',
  'c2': '新北市',
} as const;
export const REGION_DICTIONARY = {
  'c1-r1': '中正區',
  'c1-r2': '大安區',
  'c2-r1': '板橋區',
} as const;
"""

def test_cities_regions_and_dictionaries():
    doc = to_document(compile_geo([
        {"city": "台北市", "region": "中正區"},
        {"city": "台北市", "region": "大安區"},
        {"city": "新北市", "region": "板橋區"},
    ]))
    assert doc["TAIWAN_CITIES"] == [
        {"code": "c1", "label": "台北市", "regions": [{"code": "c1-r1", "label": "中正區"},
                                                   {"code": "c1-r2", "label": "大安區"}]},
        {"code": "c2", "label": "新北市", "regions": [{"code": "c2-r1", "label": "板橋區"}]},
    ]
    assert doc["CITY_DICTIONARY"] == {"c1": "台北市", "c2": "新北市"}
    assert doc["REGION_DICTIONARY"] == {"c1-r1": "中正區", "c1-r2": "大安區", "c2-r1": "板橋區"}

def test_city_revisited_later_keeps_its_code():
    doc = to_document(compile_geo([
        {"city": "A", "region": "a1"}, {"city": "B", "region": "b1"}, {"city": "A", "region": "a2"},
    ]))
    assert [c["code"] for c in doc["TAIWAN_CITIES"]] == ["c1", "c2"]
    assert doc["TAIWAN_CITIES"][0]["regions"][1] == {"code": "c1-r2", "label": "a2"}

def test_blank_city_or_region_contributes_nothing():
    res = compile_geo([{"city": None, "region": "x"}, {"city": "A", "region": None}])
    doc = to_document(res)
    assert doc == {"TAIWAN_CITIES": [], "CITY_DICTIONARY": {}, "REGION_DICTIONARY": {}}
    assert res.stats.dropped == 2

def test_duplicate_region_labels_are_kept():
    doc = to_document(compile_geo([{"city": "A", "region": "x"}, {"city": "A", "region": "x"}]))
    assert [r["code"] for r in doc["TAIWAN_CITIES"][0]["regions"]] == ["c1-r1", "c1-r2"]
    assert len(doc["REGION_DICTIONARY"]) == 2

def test_every_code_has_one_dictionary_entry():
    doc = to_document(compile_geo([{"city": c, "region": f"{c}-{i}"} for c in "ABC" for i in range(3)]))
    city_codes = [c["code"] for c in doc["TAIWAN_CITIES"]]
    region_codes = [r["code"] for c in doc["TAIWAN_CITIES"] for r in c["regions"]]
    assert sorted(city_codes) == sorted(doc["CITY_DICTIONARY"])
    assert sorted(region_codes) == sorted(doc["REGION_DICTIONARY"])
    assert len(set(region_codes)) == len(region_codes)

def test_read_rows_skips_blank_and_short_lines(tmp_path, csv_file):
    path = csv_file(tmp_path / "d.csv", "\ufeff台北市, 中正區 \r\n\r\n   \nlonely\n新北市,板橋區,extra\n")
    assert read_rows(path) == [
        {"city": "台北市", "region": "中正區"},
        {"city": "新北市", "region": "板橋區"},
    ]

def test_quote_escapes():
    assert quote("a'b") == "'a\\'b'"
    assert quote("c\\d") == "'c\\\\d'"
    assert quote("a\nb\rc") == "'a\\nb\\rc'"

def test_read_rows_treats_quotes_as_plain_text(tmp_path, csv_file):
    path = csv_file(tmp_path / "d.csv", '台北市,"中正區\n台北市,大安區\n新北市,板橋區\n')
    rows = read_rows(path)
    assert rows == [
        {"city": "台北市", "region": '"中正區'},
        {"city": "台北市", "region": "大安區"},
        {"city": "新北市", "region": "板橋區"},
    ]
    text = render_module(compile_geo(rows), "d.csv")
    assert "    { code: 'c1-r1', label: '\"中正區' }," in text.splitlines()
    assert "    { code: 'c2-r1', label: '板橋區' }," in text.splitlines()

def test_render_module_matches_expected_layout(tmp_path, csv_file, districts_csv):
    path = csv_file(tmp_path / "d.csv", districts_csv)
    text = render_module(compile_geo(read_rows(path)), "public/tw_cities_districts.csv")
    assert text == EXPECTED_TS

def test_run_writes_module_and_is_byte_stable(seeded_root):
    cfg = BuildConfig.from_env(seeded_root)
    info = runner.run(cfg)
    out = seeded_root / "src" / "data" / "taiwan-districts.ts"
    assert info["output"] == str(out.resolve())
    assert out.read_text(encoding="utf-8") == EXPECTED_TS
    first = file_sha1(out)
    runner.run(cfg)
    assert file_sha1(out) == first

def test_empty_source_renders_empty_declarations(project_root, csv_file):
    csv_file(project_root / "public" / "tw_cities_districts.csv", "\n")
    cfg = BuildConfig.from_env(project_root)
    runner.run(cfg)
    text = runner.output_path(cfg).read_text(encoding="utf-8")
    assert "export const TAIWAN_CITIES = [\n] as const;" in text
    assert "export const CITY_DICTIONARY = {\n} as const;" in text
