"""
どこで: `engine.spacetime` の代数コア。
何を: 3 生成元の幾何代数 R(1,2,0)（e1² = +1, e2² = e3² = -1）の 8 成分マルチベクトル値型と、
      幾何積/ウェッジ/ヴィー/内積/反転/双対/共役/対合/ノルム/正規化の純関数群。
なぜ: ローレンツブーストを「ロータ」（双曲回転）として構築・適用するための唯一の代数基盤とするため。

データモデル（不変条件）:
- 係数は基底 `{1, e1, e2, e3, e12, e13, e23, e123}` の順に並ぶ 8 要素の float タプル。
- index 0 がスカラー、1–3 がベクトル、4–6 が二重ベクトル、7 が擬スカラー（三重ベクトル）。
- 2D 点はグレード 1 で表す: `e1` に埋め込み重み（既定 1）、`e2`/`e3` に x/y。
- すべての演算は新しいインスタンスを返す（インスタンスは不変）。

演算子オーバーロードは使わない:
- 積の種類（幾何積/ウェッジ/ヴィー/内積）は名前付き関数で明示する。
- `==`/`-x`/添字アクセス/反復のみ特殊メソッドで提供する。

係数式は生成器出力（bivector.net の R120）と同一の項順で記述しており、
同じ浮動小数点規則の下ではビット単位で再現可能。

使用例:
    from engine.spacetime import multivector as mv

    p = mv.vector(1.0, 0.3, -0.2)
    r = mv.normalize(mv.geometric_product(mv.basis(1), p))
    q = mv.geometric_product(r, mv.geometric_product(p, mv.reverse(r)))
"""

from __future__ import annotations

import math
from typing import Iterable, Iterator

BASIS: tuple[str, ...] = ("1", "e1", "e2", "e3", "e12", "e13", "e23", "e123")
BASIS_COUNT = len(BASIS)

# グレードごとの index
SCALAR = (0,)
VECTOR = (1, 2, 3)
BIVECTOR = (4, 5, 6)
PSEUDOSCALAR = (7,)

# 表示時に省略する係数の閾値
_DISPLAY_EPS = 0.00001


class Multivector:
    """8 成分マルチベクトル（不変値型）。

    - `coeffs` は長さ 8 の float タプル。
    - ハッシュ可能で、係数が完全一致するとき等価。
    """

    __slots__ = ("_coeffs",)

    _coeffs: tuple[float, ...]

    def __init__(self, coeffs: Iterable[float] | None = None) -> None:
        # 引数省略のみゼロ。空列は他の長さ違いと同じく ValueError
        values = (0.0,) * BASIS_COUNT if coeffs is None else tuple(float(c) for c in coeffs)
        if len(values) != BASIS_COUNT:
            raise ValueError(f"Multivector requires {BASIS_COUNT} coefficients, got {len(values)}")
        object.__setattr__(self, "_coeffs", values)

    def __setattr__(self, name: str, value: object) -> None:  # pragma: no cover - 不変性の保証
        raise AttributeError("Multivector is immutable")

    # ---- アクセサ ----
    @property
    def coeffs(self) -> tuple[float, ...]:
        return self._coeffs

    @property
    def scalar_part(self) -> float:
        return self._coeffs[0]

    def __getitem__(self, idx: int) -> float:
        return self._coeffs[idx]

    def __iter__(self) -> Iterator[float]:
        return iter(self._coeffs)

    def __len__(self) -> int:
        return BASIS_COUNT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Multivector):
            return NotImplemented
        return self._coeffs == other._coeffs

    def __hash__(self) -> int:
        return hash(self._coeffs)

    def __neg__(self) -> "Multivector":
        return Multivector(-c for c in self._coeffs)

    def with_coeff(self, idx: int, value: float) -> "Multivector":
        """1 成分だけ置き換えた新しいマルチベクトルを返す。"""
        coeffs = list(self._coeffs)
        coeffs[idx] = float(value)
        return Multivector(coeffs)

    def grade_part(self, grade: int) -> "Multivector":
        """指定グレードの成分のみを残したマルチベクトルを返す。"""
        keep = (SCALAR, VECTOR, BIVECTOR, PSEUDOSCALAR)[grade]
        return Multivector(c if i in keep else 0.0 for i, c in enumerate(self._coeffs))

    def is_zero(self) -> bool:
        return not any(self._coeffs)

    def __repr__(self) -> str:
        return f"Multivector({list(self._coeffs)!r})"

    def __str__(self) -> str:
        terms = []
        for i, c in enumerate(self._coeffs):
            if c > _DISPLAY_EPS or c < -_DISPLAY_EPS:
                num = f"{c:.7f}".rstrip("0").rstrip(".")
                terms.append(f"{num}{BASIS[i] if i > 0 else ''}")
        return " + ".join(terms) if terms else "0"


# ---- 生成 ----
def zero() -> Multivector:
    return Multivector()


def basis(idx: int, value: float = 1.0) -> Multivector:
    """`value` を基底 `idx` に置いた単項マルチベクトル。"""
    coeffs = [0.0] * BASIS_COUNT
    coeffs[idx] = float(value)
    return Multivector(coeffs)


def scalar(value: float) -> Multivector:
    return basis(0, value)


def vector(w: float, x: float, y: float) -> Multivector:
    """グレード 1: `w·e1 + x·e2 + y·e3`。"""
    return Multivector((0.0, w, x, y, 0.0, 0.0, 0.0, 0.0))


IDENTITY = scalar(1.0)
E1 = basis(1)


# ---- 単項演算 ----
def reverse(a: Multivector) -> Multivector:
    """反転（基底ブレードの積順を逆にする）: 二重ベクトルと擬スカラーを符号反転。"""
    return Multivector((a[0], a[1], a[2], a[3], -a[4], -a[5], -a[6], -a[7]))


def dual(a: Multivector) -> Multivector:
    """ポアンカレ双対: グレード k をグレード 3-k へ写す。"""
    return Multivector((-a[7], -a[6], -a[5], a[4], -a[3], a[2], a[1], a[0]))


def conjugate(a: Multivector) -> Multivector:
    """クリフォード共役: ベクトルと二重ベクトルを符号反転。"""
    return Multivector((a[0], -a[1], -a[2], -a[3], -a[4], -a[5], -a[6], a[7]))


def involute(a: Multivector) -> Multivector:
    """主対合: ベクトルと擬スカラーを符号反転。"""
    return Multivector((a[0], -a[1], -a[2], -a[3], a[4], a[5], a[6], -a[7]))


# ---- 二項演算 ----
def geometric_product(a: Multivector, b: Multivector) -> Multivector:
    """幾何積 `a * b`（非可換）。"""
    a0, a1, a2, a3, a4, a5, a6, a7 = a.coeffs
    b0, b1, b2, b3, b4, b5, b6, b7 = b.coeffs
    return Multivector(
        (
            b0 * a0 + b1 * a1 - b2 * a2 - b3 * a3 + b4 * a4 + b5 * a5 - b6 * a6 - b7 * a7,
            b1 * a0 + b0 * a1 + b4 * a2 + b5 * a3 - b2 * a4 - b3 * a5 - b7 * a6 - b6 * a7,
            b2 * a0 + b4 * a1 + b0 * a2 + b6 * a3 - b1 * a4 - b7 * a5 - b3 * a6 - b5 * a7,
            b3 * a0 + b5 * a1 - b6 * a2 + b0 * a3 + b7 * a4 - b1 * a5 + b2 * a6 + b4 * a7,
            b4 * a0 + b2 * a1 - b1 * a2 - b7 * a3 + b0 * a4 + b6 * a5 - b5 * a6 - b3 * a7,
            b5 * a0 + b3 * a1 + b7 * a2 - b1 * a3 - b6 * a4 + b0 * a5 + b4 * a6 + b2 * a7,
            b6 * a0 + b7 * a1 + b3 * a2 - b2 * a3 - b5 * a4 + b4 * a5 + b0 * a6 + b1 * a7,
            b7 * a0 + b6 * a1 - b5 * a2 + b4 * a3 + b3 * a4 - b2 * a5 + b1 * a6 + b0 * a7,
        )
    )


def wedge(a: Multivector, b: Multivector) -> Multivector:
    """外積 `a ^ b`（MEET）。グレード加法的で、線形従属なら 0。"""
    a0, a1, a2, a3, a4, a5, a6, a7 = a.coeffs
    b0, b1, b2, b3, b4, b5, b6, b7 = b.coeffs
    return Multivector(
        (
            b0 * a0,
            b1 * a0 + b0 * a1,
            b2 * a0 + b0 * a2,
            b3 * a0 + b0 * a3,
            b4 * a0 + b2 * a1 - b1 * a2 + b0 * a4,
            b5 * a0 + b3 * a1 - b1 * a3 + b0 * a5,
            b6 * a0 + b3 * a2 - b2 * a3 + b0 * a6,
            b7 * a0 + b6 * a1 - b5 * a2 + b4 * a3 + b3 * a4 - b2 * a5 + b1 * a6 + b0 * a7,
        )
    )


def vee(a: Multivector, b: Multivector) -> Multivector:
    """退行積 `a & b`（JOIN）: 双対空間でのウェッジ。"""
    a0, a1, a2, a3, a4, a5, a6, a7 = a.coeffs
    b0, b1, b2, b3, b4, b5, b6, b7 = b.coeffs
    return Multivector(
        (
            a0 * b7 + a1 * b6 - a2 * b5 + a3 * b4 + a4 * b3 - a5 * b2 + a6 * b1 + a7 * b0,
            a1 * b7 - a4 * b5 + a5 * b4 + a7 * b1,
            a2 * b7 - a4 * b6 + a6 * b4 + a7 * b2,
            a3 * b7 - a5 * b6 + a6 * b5 + a7 * b3,
            a4 * b7 + a7 * b4,
            a5 * b7 + a7 * b5,
            a6 * b7 + a7 * b6,
            a7 * b7,
        )
    )


def dot(a: Multivector, b: Multivector) -> Multivector:
    """内積 `a | b`（グレードを下げる縮約）。"""
    a0, a1, a2, a3, a4, a5, a6, a7 = a.coeffs
    b0, b1, b2, b3, b4, b5, b6, b7 = b.coeffs
    return Multivector(
        (
            b0 * a0 + b1 * a1 - b2 * a2 - b3 * a3 + b4 * a4 + b5 * a5 - b6 * a6 - b7 * a7,
            b1 * a0 + b0 * a1 + b4 * a2 + b5 * a3 - b2 * a4 - b3 * a5 - b7 * a6 - b6 * a7,
            b2 * a0 + b4 * a1 + b0 * a2 + b6 * a3 - b1 * a4 - b7 * a5 - b3 * a6 - b5 * a7,
            b3 * a0 + b5 * a1 - b6 * a2 + b0 * a3 + b7 * a4 - b1 * a5 + b2 * a6 + b4 * a7,
            b4 * a0 - b7 * a3 + b0 * a4 - b3 * a7,
            b5 * a0 + b7 * a2 + b0 * a5 + b2 * a7,
            b6 * a0 + b7 * a1 + b0 * a6 + b1 * a7,
            b7 * a0 + b0 * a7,
        )
    )


def add(a: Multivector, b: Multivector) -> Multivector:
    return Multivector(x + y for x, y in zip(a.coeffs, b.coeffs))


def sub(a: Multivector, b: Multivector) -> Multivector:
    return Multivector(x - y for x, y in zip(a.coeffs, b.coeffs))


def scale(a: Multivector, s: float) -> Multivector:
    """スカラー倍（マルチベクトル × スカラー）。"""
    return Multivector(c * s for c in a.coeffs)


def add_scalar(a: Multivector, s: float) -> Multivector:
    """スカラー部のみに `s` を加える。"""
    return a.with_coeff(0, s + a[0])


# ---- ノルム ----
def norm(a: Multivector) -> float:
    """`sqrt(|scalar(a * conjugate(a))|)`。

    時間的（ブースト型）要素ではスカラー部が負になるため絶対値を取る。
    """
    scalar_part = geometric_product(a, conjugate(a))[0]
    return math.sqrt(abs(scalar_part))


def inorm(a: Multivector) -> float:
    """理想ノルム（双対のノルム）。"""
    return norm(dual(a))


def normalize(a: Multivector) -> Multivector:
    """`a * (1 / norm(a))`。ノルム 0 のときは零マルチベクトルを返す（エラーにしない）。"""
    n = norm(a)
    if n != 0.0:
        return scale(a, 1.0 / n)
    return scale(a, 0.0)


__all__ = [
    "BASIS",
    "BASIS_COUNT",
    "E1",
    "IDENTITY",
    "Multivector",
    "add",
    "add_scalar",
    "basis",
    "conjugate",
    "dot",
    "dual",
    "geometric_product",
    "involute",
    "inorm",
    "norm",
    "normalize",
    "reverse",
    "scalar",
    "scale",
    "sub",
    "vector",
    "wedge",
    "zero",
]
