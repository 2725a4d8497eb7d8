
# Breakpoint (unidad del producto) -> [R, G, B] en 0-255.
# Las claves se ordenan de forma ascendente al construir ProductTable.
PRODUCT_COLORMAPS = {
    "Reflectivity": {                      # dBZ
        5: [64, 232, 227],
        10: [1, 159, 245],
        15: [3, 0, 244],
        20: [2, 253, 2],
        25: [1, 197, 1],
        30: [0, 142, 0],
        35: [253, 248, 2],
        40: [229, 188, 0],
        45: [253, 149, 0],
        50: [253, 0, 0],
        55: [212, 0, 0],
        60: [188, 0, 0],
        65: [248, 0, 253],
        70: [152, 84, 198],
        75: [253, 253, 253],
    },
    "Velocity": {                          # m/s, negativo = acercándose
        -64: [2, 252, 2],
        -50: [1, 228, 1],
        -36: [1, 197, 1],
        -26: [7, 172, 4],
        -20: [6, 143, 3],
        -10: [4, 114, 2],
        -1: [124, 151, 123],
        0: [152, 119, 119],
        10: [137, 0, 0],
        20: [162, 0, 0],
        26: [185, 0, 0],
        36: [216, 0, 0],
        50: [239, 0, 0],
        64: [254, 0, 0],
    },
    "SpectrumWidth": {                     # m/s
        0: [118, 118, 118],
        3: [156, 156, 156],
        6: [0, 120, 0],
        9: [140, 0, 0],
        12: [255, 0, 0],
        15: [255, 170, 0],
        20: [255, 255, 0],
        30: [255, 255, 255],
    },
    "DifferentialReflectivity": {          # dB
        -4: [0, 0, 0],
        -2: [64, 64, 64],
        0: [156, 156, 156],
        0.5: [25, 0, 120],
        1: [0, 51, 204],
        1.5: [0, 204, 255],
        2: [0, 255, 0],
        3: [255, 255, 0],
        4: [255, 128, 0],
        6: [255, 0, 0],
        8: [255, 0, 255],
    },
    "CorrelationCoefficient": {            # adimensional
        0.2: [0, 0, 0],
        0.45: [149, 149, 156],
        0.65: [22, 20, 140],
        0.75: [9, 2, 217],
        0.8: [137, 135, 214],
        0.85: [92, 255, 89],
        0.9: [139, 207, 2],
        0.93: [255, 251, 0],
        0.95: [231, 0, 0],
        0.97: [181, 0, 0],
        1.0: [255, 176, 176],
        1.05: [255, 255, 255],
    },
}

# Cotas de valores renderizables (intervalo abierto) y geometría del barrido.
PRODUCT_CUTOFFS = {
    "Reflectivity": {
        "lowerCutoff": 5.0,
        "upperCutoff": 80.0,
        "coneOfSilenceRadius": 21.25,
        "scaledResolution": 2.5,
    },
    "Velocity": {
        "lowerCutoff": -64.0,
        "upperCutoff": 64.0,
        "coneOfSilenceRadius": 21.25,
        "scaledResolution": 2.5,
    },
    "SpectrumWidth": {
        "lowerCutoff": 0.0,
        "upperCutoff": 30.0,
        "coneOfSilenceRadius": 21.25,
        "scaledResolution": 2.5,
    },
    "DifferentialReflectivity": {
        "lowerCutoff": -4.0,
        "upperCutoff": 8.0,
        "coneOfSilenceRadius": 21.25,
        "scaledResolution": 2.5,
    },
    "CorrelationCoefficient": {
        "lowerCutoff": 0.2,
        "upperCutoff": 1.05,
        "coneOfSilenceRadius": 21.25,
        "scaledResolution": 2.5,
    },
}

# Cada celda aceptada emite dos triángulos
VERTICES_PER_CELL = 6
COMPONENTS_PER_VERTEX = 3
