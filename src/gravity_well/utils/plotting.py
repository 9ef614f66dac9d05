from matplotlib import colors

from gravity_well.core.store import Kind

KIND_COLORS = {
    Kind.PRIMARY: "purple",
    Kind.SATELLITE: "gray",
    Kind.MOON: "gold",
}


def kind_color(kind: Kind) -> tuple[float, float, float]:
    return colors.to_rgb(KIND_COLORS[kind])
