# Fleet compliance scheduler — recurring inspection scheduling engine
