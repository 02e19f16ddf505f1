import requests

from src.addons.recipes import AddonRecipe, RecipeRegistry
from src.addons.resolver import RecipeResolver
from src.addons.steps import VersionStep


class _Resp:
    def __init__(self, status_code: int, data=None):
        self.status_code = status_code
        self._data = data

    def json(self):
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


class _Sess:
    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        resp = self.routes.get(url)
        if resp is None:
            return _Resp(404, {"message": "Not Found"})
        if isinstance(resp, Exception):
            raise resp
        return resp


URL = "https://addons.example/{name}.json"

_LOCAL = AddonRecipe(name="local", description="", steps=(VersionStep("a", "1"),))


def _resolver(routes, **kw) -> tuple[RecipeResolver, _Sess]:
    s = _Sess(routes)
    r = RecipeResolver(RecipeRegistry.of(_LOCAL), url_template=URL, session=s, timeout_s=3, **kw)
    return r, s


def test_builtin_recipe_wins_without_network():
    r, s = _resolver({})
    assert r.resolve("local") is _LOCAL
    assert s.calls == []


def test_remote_recipe_is_parsed():
    payload = {
        "name": "timber",
        "description": "Logging",
        "steps": [{"type": "toml_version", "key": "timber", "value": "5.0.1"}],
    }
    r, s = _resolver({"https://addons.example/timber.json": _Resp(200, payload)})
    recipe = r.resolve("timber")
    assert recipe is not None
    assert recipe.steps == (VersionStep("timber", "5.0.1"),)
    assert s.calls == [("https://addons.example/timber.json", 3)]


def test_remote_not_found_returns_none():
    r, s = _resolver({})
    assert r.resolve("missing") is None
    assert len(s.calls) == 1


def test_remote_network_error_returns_none():
    r, _ = _resolver({"https://addons.example/x.json": requests.ConnectionError("down")})
    assert r.resolve("x") is None


def test_remote_invalid_json_returns_none():
    r, _ = _resolver({"https://addons.example/x.json": _Resp(200, ValueError("bad json"))})
    assert r.resolve("x") is None


def test_remote_malformed_recipe_returns_none():
    r, _ = _resolver({"https://addons.example/x.json": _Resp(200, {"name": "x", "steps": [{"type": "?"}]})})
    assert r.resolve("x") is None


def test_invalid_names_never_hit_the_network():
    r, s = _resolver({})
    assert r.resolve("../etc/passwd") is None
    assert r.resolve("a b") is None
    assert s.calls == []


def test_remote_lookup_can_be_disabled():
    r, s = _resolver({}, allow_remote=False)
    assert r.resolve("timber") is None
    assert s.calls == []


def test_url_template_from_env(monkeypatch):
    monkeypatch.setenv("CREATE_DROID_ADDON_REGISTRY_URL", "https://mirror.example/a/{name}.json")
    s = _Sess({})
    RecipeResolver(RecipeRegistry.of(), session=s).resolve("coil")
    assert s.calls[0][0] == "https://mirror.example/a/coil.json"
