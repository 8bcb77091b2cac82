"""Place for command implementations; it holds none at present."""