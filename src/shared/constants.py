from enum import Enum

# --- Входные данные
# Минимальный размер сетки по каждой стороне (ячейка 2×2)
MIN_GRID_SIZE = 2

# Минимальное число различных точек в кольце
MIN_RING_POINTS = 3

# Площадь, ниже которой кольцо считается вырожденным и отбрасывается
RING_AREA_EPSILON = 1e-9

# Допуск на совпадение соседних точек кольца (в координатах сетки)
POINT_MERGE_EPSILON = 1e-12

# Доля ребра, на которую точка пересечения отступает от отсчёта,
# равного уровню (иначе кольцо дважды проходит через одну точку)
CROSSING_SAMPLE_MARGIN = 1e-6

# Допуск, при котором ось экструзии считается лежащей в плоскости контура
AXIS_PLANE_EPSILON = 1e-9

# --- Marching Squares: именованные маски
# Битовая раскладка (по часовой стрелке, начиная с верхнего левого):
# b0: TL, b1: TR, b2: BR, b3: BL
MS_MASK_EMPTY = 0  # 0b0000: все ниже уровня
MS_MASK_FULL = 15  # 0b1111: все выше уровня

# Диагональные (седловые) случаи: неоднозначны без разрешения центра
MS_MASK_TL_BR = 5  # 0b0101: TL+BR
MS_MASK_TR_BL = 10  # 0b1010: TR+BL

MS_NO_CONTOUR_CASES = {MS_MASK_EMPTY, MS_MASK_FULL}
MS_AMBIGUOUS_CASES = (MS_MASK_TL_BR, MS_MASK_TR_BL)

# Рёбра клетки
MS_EDGE_TOP = 0
MS_EDGE_RIGHT = 1
MS_EDGE_BOTTOM = 2
MS_EDGE_LEFT = 3

# Таблица отрезков: маска -> пары (ребро_входа, ребро_выхода).
# Направление выбрано так, что область «выше уровня» остаётся слева,
# поэтому внешние кольца имеют положительную площадь (формула шнурования).
# Для седловых масок значение None: их разрешает политика седла.
MS_SEGMENT_TABLE: tuple[tuple[tuple[int, int], ...] | None, ...] = (
    (),  # 0
    ((MS_EDGE_TOP, MS_EDGE_LEFT),),  # 1  TL
    ((MS_EDGE_RIGHT, MS_EDGE_TOP),),  # 2  TR
    ((MS_EDGE_RIGHT, MS_EDGE_LEFT),),  # 3  TL+TR
    ((MS_EDGE_BOTTOM, MS_EDGE_RIGHT),),  # 4  BR
    None,  # 5  TL+BR
    ((MS_EDGE_BOTTOM, MS_EDGE_TOP),),  # 6  TR+BR
    ((MS_EDGE_BOTTOM, MS_EDGE_LEFT),),  # 7  все кроме BL
    ((MS_EDGE_LEFT, MS_EDGE_BOTTOM),),  # 8  BL
    ((MS_EDGE_TOP, MS_EDGE_BOTTOM),),  # 9  TL+BL
    None,  # 10 TR+BL
    ((MS_EDGE_RIGHT, MS_EDGE_BOTTOM),),  # 11 все кроме BR
    ((MS_EDGE_LEFT, MS_EDGE_RIGHT),),  # 12 BL+BR
    ((MS_EDGE_TOP, MS_EDGE_RIGHT),),  # 13 все кроме TR
    ((MS_EDGE_LEFT, MS_EDGE_TOP),),  # 14 все кроме TL
    (),  # 15
)

# Седловые случаи: (углы разделены, углы соединены через центр)
MS_SADDLE_SEGMENTS: dict[int, tuple[tuple[tuple[int, int], ...], ...]] = {
    MS_MASK_TL_BR: (
        ((MS_EDGE_TOP, MS_EDGE_LEFT), (MS_EDGE_BOTTOM, MS_EDGE_RIGHT)),
        ((MS_EDGE_TOP, MS_EDGE_RIGHT), (MS_EDGE_BOTTOM, MS_EDGE_LEFT)),
    ),
    MS_MASK_TR_BL: (
        ((MS_EDGE_RIGHT, MS_EDGE_TOP), (MS_EDGE_LEFT, MS_EDGE_BOTTOM)),
        ((MS_EDGE_LEFT, MS_EDGE_TOP), (MS_EDGE_RIGHT, MS_EDGE_BOTTOM)),
    ),
}

# Вес для усреднения четырёх значений в ячейке (1/4) при разрешении седла
MARCHING_SQUARES_CENTER_WEIGHT = 0.25

# --- Экструзия
# Ось экструзии по умолчанию (нормаль плоскости контура)
DEFAULT_EXTRUDE_AXIS = (0.0, 0.0, 1.0)
# Масштаб глубины: глубина полосы = уровень * масштаб
DEFAULT_DEPTH_SCALE = 1.0

# --- Цвет
# Размер таблицы цветов (LUT) для векторного раскрашивания
COLOR_LUT_SIZE = 2048
# Порог хромы, ниже которого оттенок цвета считается неопределённым
HCL_ACHROMATIC_CHROMA = 1e-4
# Опорная белая точка D65
LAB_WHITE_D65 = (0.95047, 1.0, 1.08883)

# Палитра по умолчанию
DEFAULT_PALETTE = 'viridis'

# Доля оборота тона для радужной палитры (HSL, тон 0 … 0.8)
RAINBOW_HUE_SPAN = 0.8

# Опорные цвета палитры viridis (равномерные узлы)
VIRIDIS_STOPS = (
    '#440154',
    '#482475',
    '#414487',
    '#355f8d',
    '#2a788e',
    '#21918c',
    '#22a884',
    '#44bf70',
    '#7ad151',
    '#bddf26',
    '#fde725',
)

# Палитра изолиний: синий → голубой → белый → оранжевый → красный
ISOLINE_STOPS = ('blue', 'lightblue', 'white', 'orange', 'red')

# Спектральная палитра плоских полос
SPECTRUM_STOPS = ('#0000ff', '#00ffff', '#00ff00', '#ffff00', '#ff0000')

# --- Количество уровней по умолчанию, если список порогов не задан
DEFAULT_THRESHOLD_COUNT = 10

# --- SVG
SVG_STROKE_COLOR = '#ffffff'
SVG_STROKE_WIDTH = 0.5
SVG_FILL_OPACITY = 0.8
SVG_COORD_PRECISION = 3

# --- Профили
PROFILES_DIR = 'configs/profiles'
DEFAULT_PROFILE = 'default'


class RenderMode(str, Enum):
    FLAT = 'FLAT'
    SOLID = 'SOLID'


class ColorInterpolation(str, Enum):
    HCL = 'HCL'  # перцептивно равномерная (CIE LCh)
    RGB = 'RGB'  # покомпонентная


class ColorBy(str, Enum):
    VALUE = 'VALUE'  # по значению уровня в домене
    INDEX = 'INDEX'  # по порядковому номеру уровня


def default_render_mode() -> RenderMode:
    return RenderMode.FLAT
