"""
どこで: `engine.io` サブパッケージ（入力）。
何を: キーボード押下状態から観測者の入力信号を作る `KeyboardInput` を提供。
なぜ: 入力デバイス依存を隔離し、シミュレーション層へは `InputSignals` だけを渡すため。
"""
