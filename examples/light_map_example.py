"""Minimal example chaining LightMap transforms."""

from light_map import LightMap


def main() -> None:
    """Build a nested map, transform it and print the results."""
    light_map = LightMap([["key2", "value2"], ["key1", [["inner", "value1"]]], ["key", "value"]])
    print(f"{light_map=}")
    print("sorted:", light_map.sort_keys())
    print("filtered:", light_map.filter(lambda value, _key, _self: isinstance(value, str)))
    print("mapped:", light_map.map(lambda value, key, _self: (key.upper(), value)))
    print("index of key1:", light_map.index_of("key1"))
    print("replace:", LightMap([["{name}", "world"]]).replace("hello {name}"))
    print("version:", LightMap.version())


if __name__ == "__main__":
    main()
