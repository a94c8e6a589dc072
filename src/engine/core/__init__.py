"""
どこで: `engine.core` サブパッケージ。
何を: フレーム駆動（Tickable/FrameClock）と描画ウィンドウを提供。
なぜ: 入力/シミュレーション/描画の更新順を一箇所で統一し、上位層（api）から再利用するため。
"""
