"""
どこで: `engine.render` サブパッケージ。
何を: `FrameResult` → pyglet 円スプライトの描画入口。SpriteLayer/SpriteStyle を提供。
なぜ: 計算（spacetime）と描画の責務を分離し、pyglet 依存を局所化するため。
"""
